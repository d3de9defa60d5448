"""
Base Page class for the Page Object Model.

This class provides functionality shared by all page objects: the
element access layer, locator validation, navigation and the load
signal every screen waits on.

Key Concepts Demonstrated:
- Base class pattern for code reuse
- Centralised, enumerated locators per page (``Locators`` enum)
- Lazy handles validated once at construction
- Outcome boundary: only plain values leave a page object
"""

from __future__ import annotations

from enum import Enum

from playwright.sync_api import Page

from config import Settings
from storefront.elements import ElementAccess, ElementHandle
from storefront.errors import InteractionError

CART_BADGE_TEST_ID = "shopping-cart-badge"


def validate_locators(page_name: str, locators: type[Enum]) -> None:
    """
    Check a page's locator enum before any handle is built.

    Args:
        page_name: Page class name, for error messages.
        locators: Enum whose values are identifiers.

    Raises:
        TypeError: If ``locators`` is not an Enum or a value is not a string.
        ValueError: If a value is empty or shared by two members.
    """
    if not (isinstance(locators, type) and issubclass(locators, Enum)):
        raise TypeError(f"{page_name}.Locators must be an Enum, got {locators!r}")
    seen: dict[str, str] = {}
    # __members__ includes aliases, which Enum creates for repeated values
    for name, member in locators.__members__.items():
        if not isinstance(member.value, str):
            raise TypeError(f"{page_name}.Locators.{name} must be a string identifier")
        if not member.value.strip():
            raise ValueError(f"{page_name}.Locators.{name} is empty")
        if member.value in seen:
            raise ValueError(
                f"{page_name}.Locators.{name} duplicates {seen[member.value]} ({member.value!r})"
            )
        seen[member.value] = name


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare a nested ``Locators`` enum; each member maps a
    stable key to a test id (or ``css=`` selector).

    Attributes:
        page: Playwright page instance.
        settings: Immutable harness settings.
        access: Element access layer bound to ``page``.
    """

    URL_PATH = "/"

    class Locators(Enum):
        pass

    def __init__(self, page: Page, settings: Settings):
        """
        Initialize the base page.

        Args:
            page: Playwright page instance.
            settings: Immutable harness settings.
        """
        validate_locators(type(self).__name__, self.Locators)
        self.page = page
        self.settings = settings
        self.access = ElementAccess(
            page, settings.action_timeout_ms, settings.navigation_timeout_ms
        )
        self._handles = {
            member: self.access.locate(member.value) for member in self.Locators
        }

    # -------------------------------------------------------------------------
    # Locators
    # -------------------------------------------------------------------------

    def element(self, key: Enum) -> ElementHandle:
        """
        Return the lazy handle for ``key``.

        Raises:
            KeyError: If ``key`` is not a member of this page's Locators.
        """
        try:
            return self._handles[key]
        except (KeyError, TypeError):
            raise KeyError(f"{type(self).__name__} has no locator {key!r}") from None

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate_to(self, path: str = "") -> None:
        """
        Navigate to a path relative to the base URL.

        Args:
            path: URL path relative to base URL.
        """
        self.access.goto(self.settings.url(path))

    def wait_for_page_load(self) -> None:
        """Wait for DOM content of the current navigation to load."""
        self.access.wait_for_load_signal()

    def reload(self) -> None:
        """Reload the current page."""
        self.access.reload()

    def current_url(self) -> str:
        """Return the URL the page is showing."""
        return self.page.url

    # -------------------------------------------------------------------------
    # Screen capability
    # -------------------------------------------------------------------------

    def is_displayed(self) -> bool:
        """Return True when this screen is currently shown."""
        raise NotImplementedError

    def verify_loaded(self) -> None:
        """Wait until this screen's landmark elements are visible."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Shared helpers
    # -------------------------------------------------------------------------

    def _read_cart_badge(self, badge: ElementHandle) -> int:
        """
        Read the cart badge count.

        An absent badge means an empty cart and reads as 0.
        """
        if not self.access.is_visible(badge):
            return 0
        text = self.access.read_text(badge).strip()
        try:
            return int(text)
        except ValueError as exc:
            raise InteractionError(
                badge.identifier, "read cart badge count", f"badge text {text!r} is not an integer"
            ) from exc

    def _read_price(self, handle: ElementHandle) -> float:
        text = self.access.read_text(handle).strip()
        try:
            return float(text.replace("$", "").replace(",", ""))
        except ValueError as exc:
            raise InteractionError(
                handle.identifier, "read price", f"price text {text!r} is not a number"
            ) from exc
