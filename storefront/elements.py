"""
Element access layer.

Resolves stable identifiers into lazy element handles and provides the
wait-aware read/write primitives page objects are built from.

Key Concepts:
- Handles are deferred: nothing touches the DOM until an action runs,
  and every action re-resolves the underlying node.
- Reads are preceded by an explicit visibility wait instead of a fixed
  delay.
- Playwright errors are translated into the harness error taxonomy,
  always naming the identifier and the operation. Actions raise
  InteractionError, waits and navigation raise WaitTimeoutError.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page, Playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from storefront.errors import InteractionError, WaitTimeoutError

logger = logging.getLogger(__name__)

CSS_PREFIX = "css="

WAIT_STATES = ("attached", "detached", "visible", "hidden")


def configure_test_id_attribute(playwright: Playwright, attribute: str) -> None:
    """Register the attribute ``get_by_test_id`` resolves against."""
    playwright.selectors.set_test_id_attribute(attribute)


@dataclass(frozen=True)
class ElementHandle:
    """
    Lazy reference to zero-or-one live DOM nodes.

    Attributes:
        identifier: Human readable path used in error messages.
        locator: Playwright locator, re-resolved on every use.
    """

    identifier: str
    locator: Locator

    def nth(self, index: int) -> "ElementHandle":
        """Handle for the ``index``-th match of this handle."""
        return ElementHandle(f"{self.identifier}[{index}]", self.locator.nth(index))

    def child(self, test_id: str) -> "ElementHandle":
        """Handle for a descendant with the given test id."""
        return ElementHandle(
            f"{self.identifier} >> {test_id}", self.locator.get_by_test_id(test_id)
        )

    def button(self, name: str) -> "ElementHandle":
        """Handle for a descendant button with the given accessible name."""
        return ElementHandle(
            f"{self.identifier} >> button[{name}]",
            self.locator.get_by_role("button", name=name),
        )


class ElementAccess:
    """
    Wait-aware primitives over a single Playwright page.

    Attributes:
        page: Playwright page instance.
        action_timeout_ms: Bound for element waits and actions.
        navigation_timeout_ms: Bound for load signals and URL waits.
    """

    def __init__(self, page: Page, action_timeout_ms: int, navigation_timeout_ms: int):
        self.page = page
        self.action_timeout_ms = action_timeout_ms
        self.navigation_timeout_ms = navigation_timeout_ms

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def locate(self, identifier: str) -> ElementHandle:
        """
        Return a deferred handle for ``identifier``.

        Identifiers are test-id values unless prefixed with ``css=``, in
        which case the remainder is used as a CSS selector. This call does
        not touch the DOM.

        Args:
            identifier: Test id or ``css=`` selector.

        Returns:
            ElementHandle for the identifier.
        """
        if identifier.startswith(CSS_PREFIX):
            return ElementHandle(identifier, self.page.locator(identifier))
        return ElementHandle(identifier, self.page.get_by_test_id(identifier))

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def set_value(self, handle: ElementHandle, value: str) -> None:
        """
        Clear the element, then write ``value`` into it.

        Raises:
            InteractionError: If the element never became editable.
        """
        try:
            handle.locator.clear(timeout=self.action_timeout_ms)
            handle.locator.fill(value, timeout=self.action_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise InteractionError(
                handle.identifier,
                "set value",
                f"not editable within {self.action_timeout_ms}ms",
            ) from exc
        except PlaywrightError as exc:
            raise InteractionError(handle.identifier, "set value", str(exc)) from exc

    def click(self, handle: ElementHandle) -> None:
        """
        Click the element once it is actionable.

        Raises:
            InteractionError: If the element never became clickable.
        """
        try:
            handle.locator.click(timeout=self.action_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise InteractionError(
                handle.identifier,
                "click",
                f"not clickable within {self.action_timeout_ms}ms",
            ) from exc
        except PlaywrightError as exc:
            raise InteractionError(handle.identifier, "click", str(exc)) from exc

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def wait_until(self, handle: ElementHandle, state: str = "visible") -> None:
        """
        Suspend until the element reaches ``state``.

        Raises:
            ValueError: If ``state`` is not a Playwright wait state.
            WaitTimeoutError: If the state was not reached in time.
        """
        if state not in WAIT_STATES:
            raise ValueError(f"Unknown wait state {state!r}; expected one of {WAIT_STATES}")
        try:
            handle.locator.wait_for(state=state, timeout=self.action_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise WaitTimeoutError(
                handle.identifier,
                f"wait for {state}",
                f"not {state} within {self.action_timeout_ms}ms",
            ) from exc
        except PlaywrightError as exc:
            raise WaitTimeoutError(handle.identifier, f"wait for {state}", str(exc)) from exc

    def read_text(self, handle: ElementHandle) -> str:
        """
        Wait for the element to be visible and return its rendered text.

        Raises:
            WaitTimeoutError: If the element never became visible.
        """
        self.wait_until(handle, "visible")
        try:
            return handle.locator.inner_text(timeout=self.action_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise WaitTimeoutError(
                handle.identifier,
                "read text",
                f"detached before its text could be read within {self.action_timeout_ms}ms",
            ) from exc
        except PlaywrightError as exc:
            raise WaitTimeoutError(handle.identifier, "read text", str(exc)) from exc

    def is_visible(self, handle: ElementHandle) -> bool:
        """Return the element's visibility right now, without waiting."""
        try:
            return handle.locator.is_visible()
        except PlaywrightError as exc:
            raise InteractionError(handle.identifier, "check visibility", str(exc)) from exc

    def count(self, handle: ElementHandle) -> int:
        """Return how many nodes currently match the handle."""
        try:
            return handle.locator.count()
        except PlaywrightError as exc:
            raise InteractionError(handle.identifier, "count", str(exc)) from exc

    def all_texts(self, handle: ElementHandle) -> list[str]:
        """Return the rendered text of every node matching the handle."""
        try:
            return handle.locator.all_inner_texts()
        except PlaywrightError as exc:
            raise InteractionError(handle.identifier, "read all texts", str(exc)) from exc

    # -------------------------------------------------------------------------
    # Navigation signals
    # -------------------------------------------------------------------------

    def goto(self, url: str) -> None:
        """
        Navigate to ``url`` and wait for DOM content to load.

        Raises:
            WaitTimeoutError: If navigation did not settle in time.
        """
        logger.debug("Navigating to %s", url)
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=self.navigation_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise WaitTimeoutError(
                url, "navigate", f"no response within {self.navigation_timeout_ms}ms"
            ) from exc
        except PlaywrightError as exc:
            raise WaitTimeoutError(url, "navigate", str(exc)) from exc

    def wait_for_load_signal(self) -> None:
        """
        Suspend until the page fires ``domcontentloaded``.

        Raises:
            WaitTimeoutError: If the signal did not fire in time.
        """
        try:
            self.page.wait_for_load_state("domcontentloaded", timeout=self.navigation_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise WaitTimeoutError(
                self.page.url,
                "wait for load signal",
                f"domcontentloaded not fired within {self.navigation_timeout_ms}ms",
            ) from exc
        except PlaywrightError as exc:
            raise WaitTimeoutError(self.page.url, "wait for load signal", str(exc)) from exc

    def wait_for_url(self, pattern: str | re.Pattern[str]) -> None:
        """
        Suspend until the page URL matches ``pattern``.

        Raises:
            WaitTimeoutError: If the URL did not match in time.
        """
        try:
            self.page.wait_for_url(
                pattern, wait_until="domcontentloaded", timeout=self.navigation_timeout_ms
            )
        except PlaywrightTimeoutError as exc:
            shown = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
            raise WaitTimeoutError(
                shown,
                "wait for url",
                f"still at {self.page.url} after {self.navigation_timeout_ms}ms",
            ) from exc
        except PlaywrightError as exc:
            shown = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
            raise WaitTimeoutError(shown, "wait for url", str(exc)) from exc

    def reload(self) -> None:
        """
        Reload the current page and wait for DOM content to load.

        Raises:
            WaitTimeoutError: If the reload did not settle in time.
        """
        try:
            self.page.reload(wait_until="domcontentloaded", timeout=self.navigation_timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise WaitTimeoutError(
                self.page.url, "reload", f"no response within {self.navigation_timeout_ms}ms"
            ) from exc
        except PlaywrightError as exc:
            raise WaitTimeoutError(self.page.url, "reload", str(exc)) from exc
