"""
Error taxonomy for the harness.

Every error names the element identifier (or artifact path) and the
operation that was attempted, so a failing run can be triaged from the
message alone.
"""

from __future__ import annotations


class HarnessError(Exception):
    """
    Base class for all harness errors.

    Attributes:
        identifier: Element identifier, selector or file path involved.
        operation: Operation that was being attempted.
        detail: Optional free-form explanation.
    """

    def __init__(self, identifier: str, operation: str, detail: str = ""):
        self.identifier = identifier
        self.operation = operation
        self.detail = detail
        message = f"{operation} failed for '{identifier}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class WaitTimeoutError(HarnessError, TimeoutError):
    """A wait exceeded its bound before the element reached the expected state."""


class InteractionError(HarnessError):
    """An action was attempted on an element that was not interactable."""


class SessionUnavailableError(HarnessError):
    """No valid persisted session exists to seed a browser context from."""


class SessionBootstrapError(HarnessError):
    """The one-time interactive login did not reach the catalog."""


class ScreenStateError(HarnessError):
    """An operation was attempted on a screen the flow has already left."""
