"""Login page object for storefront authentication flows."""

from __future__ import annotations

from enum import Enum

from playwright.sync_api import Page

from config import Settings
from storefront.pages.base_page import BasePage


class LoginFailure(Enum):
    """Cause of a rejected login, as reported by the visible error banner."""

    USERNAME_REQUIRED = "Username is required"
    PASSWORD_REQUIRED = "Password is required"
    CREDENTIALS_MISMATCH = "Username and password do not match"
    LOCKED_OUT = "Sorry, this user has been locked out"
    UNKNOWN = ""


def classify_login_error(message: str) -> LoginFailure:
    """
    Map the text of the login error banner onto a ``LoginFailure``.

    Args:
        message: Visible error text.

    Returns:
        Matching cause, or ``LoginFailure.UNKNOWN``.
    """
    for failure in LoginFailure:
        if failure.value and failure.value in message:
            return failure
    return LoginFailure.UNKNOWN


class LoginPage(BasePage):
    """
    Page object for the login page.

    Provides methods for:
    - Entering credentials
    - Submitting the login form
    - Reading and dismissing the error banner

    ``login`` never asserts its own outcome; callers observe the URL or
    the error banner.
    """

    URL_PATH = "/"

    class Locators(Enum):
        USERNAME_INPUT = "username"
        PASSWORD_INPUT = "password"
        LOGIN_BUTTON = "login-button"
        ERROR_MESSAGE = "error"
        ERROR_BUTTON = "error-button"

    def __init__(self, page: Page, settings: Settings):
        """
        Initialize LoginPage.

        Args:
            page: Playwright page instance.
            settings: Immutable harness settings.
        """
        super().__init__(page, settings)

    def navigate(self) -> "LoginPage":
        """
        Navigate to the login page.

        Returns:
            Self for method chaining.
        """
        self.navigate_to(self.URL_PATH)
        self.wait_for_page_load()
        return self

    def is_displayed(self) -> bool:
        """Return True when the login button is visible."""
        return self.access.is_visible(self.element(self.Locators.LOGIN_BUTTON))

    def verify_loaded(self) -> None:
        """Wait for the login form to be visible."""
        self.access.wait_until(self.element(self.Locators.USERNAME_INPUT))
        self.access.wait_until(self.element(self.Locators.LOGIN_BUTTON))

    def enter_username(self, username: str) -> None:
        """Replace the username field's content with ``username``."""
        self.access.set_value(self.element(self.Locators.USERNAME_INPUT), username)

    def enter_password(self, password: str) -> None:
        """Replace the password field's content with ``password``."""
        self.access.set_value(self.element(self.Locators.PASSWORD_INPUT), password)

    def click_login(self) -> None:
        """Submit the login form."""
        self.access.click(self.element(self.Locators.LOGIN_BUTTON))

    def login(self, username: str, password: str) -> None:
        """
        Fill credentials and submit the login form.

        Args:
            username: Username to enter.
            password: Password to enter.
        """
        self.enter_username(username)
        self.enter_password(password)
        self.click_login()

    def login_standard_user(self) -> None:
        """Log in with the configured standard credential."""
        self.login(self.settings.standard_user, self.settings.standard_password)

    def get_error_message(self) -> str:
        """Wait for the error banner and return its text."""
        return self.access.read_text(self.element(self.Locators.ERROR_MESSAGE))

    def is_error_displayed(self) -> bool:
        """Return True when the error banner is visible."""
        return self.access.is_visible(self.element(self.Locators.ERROR_MESSAGE))

    def login_failure(self) -> LoginFailure:
        """Classify the visible error banner."""
        return classify_login_error(self.get_error_message())

    def close_error(self) -> None:
        """Dismiss the error banner if it is shown."""
        button = self.element(self.Locators.ERROR_BUTTON)
        if self.access.is_visible(button):
            self.access.click(button)
