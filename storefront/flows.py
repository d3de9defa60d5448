"""
Screen state machine for composing scenarios.

The storefront moves between three screens: logged out, catalog and
product detail. Each screen is a distinct type exposing only the
operations valid there; a transition hands back the next screen's state
and retires the current one. Calling into a retired state raises
``ScreenStateError`` instead of acting on whatever page happens to be
showing.

Example:
    catalog = Storefront(page, settings).start().login("standard_user", "secret_sauce")
    catalog.add_item(0)
    detail = catalog.open_item(0)
    assert detail.cart_count() == 1
    catalog = detail.back()
"""

from __future__ import annotations

import random
from enum import Enum

from playwright.sync_api import Page

from config import Settings
from storefront.errors import ScreenStateError
from storefront.pages.inventory_page import InventoryPage, ProductDetails
from storefront.pages.login_page import LoginFailure, LoginPage
from storefront.pages.product_detail_page import ProductDetailPage


class Screen(Enum):
    LOGGED_OUT = "logged-out"
    CATALOG = "catalog"
    DETAIL = "detail"


class _Pages:
    """Page objects sharing one Playwright page for the life of a flow."""

    def __init__(self, page: Page, settings: Settings, rng: random.Random | None = None):
        self.login = LoginPage(page, settings)
        self.inventory = InventoryPage(page, settings, rng=rng)
        self.detail = ProductDetailPage(page, settings)


class ScreenState:
    """Base for the per-screen states of a flow."""

    screen: Screen

    def __init__(self, pages: _Pages):
        self._pages = pages
        self._retired = False

    @property
    def is_current(self) -> bool:
        return not self._retired

    def _require_current(self, operation: str) -> None:
        if self._retired:
            raise ScreenStateError(
                self.screen.value,
                operation,
                "this screen was left by an earlier transition; use the state it returned",
            )

    def _advance(self, operation: str, next_state: "ScreenState") -> "ScreenState":
        self._require_current(operation)
        self._retired = True
        return next_state


class LoggedOut(ScreenState):
    """The login screen."""

    screen = Screen.LOGGED_OUT

    def login(self, username: str, password: str) -> "Catalog":
        """Log in and wait for the catalog; raises WaitTimeoutError if it never appears."""
        self._require_current("login")
        self._pages.login.login(username, password)
        self._pages.inventory.wait_until_reached()
        self._pages.inventory.verify_loaded()
        return self._advance("login", Catalog(self._pages))

    def login_expecting_error(self, username: str, password: str) -> str:
        """Submit credentials that should be rejected and return the error text."""
        self._require_current("login expecting error")
        self._pages.login.login(username, password)
        return self._pages.login.get_error_message()

    def failure(self) -> LoginFailure:
        self._require_current("classify login error")
        return self._pages.login.login_failure()

    def error_displayed(self) -> bool:
        self._require_current("check login error")
        return self._pages.login.is_error_displayed()

    def dismiss_error(self) -> None:
        self._require_current("dismiss login error")
        self._pages.login.close_error()


class _CartScreen(ScreenState):

    def cart_count(self) -> int:
        self._require_current("read cart count")
        return self._cart_page().get_cart_item_count()

    def _cart_page(self) -> InventoryPage | ProductDetailPage:
        raise NotImplementedError


class Catalog(_CartScreen):
    """The product catalog."""

    screen = Screen.CATALOG

    def _cart_page(self) -> InventoryPage:
        return self._pages.inventory

    def header(self) -> str:
        self._require_current("read header")
        return self._pages.inventory.get_page_header()

    def item_count(self) -> int:
        self._require_current("count items")
        return self._pages.inventory.get_inventory_items_count()

    def product(self, index: int) -> ProductDetails:
        self._require_current("read product")
        return self._pages.inventory.get_product_attributes(index)

    def add_item(self, index: int) -> int:
        self._require_current("add item")
        return self._pages.inventory.add_product_to_cart_by_index(index)

    def add_random_items(self, count: int) -> list[int]:
        self._require_current("add random items")
        return self._pages.inventory.add_random_products_to_cart(count)

    def remove_item(self, index: int) -> None:
        self._require_current("remove item")
        self._pages.inventory.remove_product_from_cart(index)

    def reset_app_state(self) -> "Catalog":
        self._require_current("reset app state")
        self._pages.inventory.reset_app_state()
        return self

    def open_item(self, index: int) -> "Detail":
        self._require_current("open item")
        self._pages.inventory.go_to_product_details(index)
        self._pages.detail.wait_until_reached()
        self._pages.detail.verify_loaded()
        return self._advance("open item", Detail(self._pages))

    def logout(self) -> LoggedOut:
        self._require_current("logout")
        self._pages.inventory.logout()
        self._pages.login.verify_loaded()
        return self._advance("logout", LoggedOut(self._pages))


class Detail(_CartScreen):
    """A single product's detail view."""

    screen = Screen.DETAIL

    def _cart_page(self) -> ProductDetailPage:
        return self._pages.detail

    def product(self) -> ProductDetails:
        self._require_current("read product")
        return self._pages.detail.get_product_details()

    def add_to_cart(self) -> None:
        self._require_current("add to cart")
        self._pages.detail.add_to_cart()

    def remove_from_cart(self) -> None:
        self._require_current("remove from cart")
        self._pages.detail.remove_from_cart()

    def back(self) -> Catalog:
        self._require_current("back to catalog")
        self._pages.detail.go_back_to_products()
        self._pages.inventory.verify_loaded()
        return self._advance("back to catalog", Catalog(self._pages))


class Storefront:
    """
    Entry point of a flow over one Playwright page.

    Attributes:
        settings: Immutable harness settings.
    """

    def __init__(self, page: Page, settings: Settings, rng: random.Random | None = None):
        self.settings = settings
        self._pages = _Pages(page, settings, rng=rng)

    def start(self) -> LoggedOut:
        """Open the login screen."""
        self._pages.login.navigate()
        self._pages.login.verify_loaded()
        return LoggedOut(self._pages)

    def resume(self) -> Catalog:
        """Open the catalog directly; the page's context must already be authenticated."""
        self._pages.inventory.navigate()
        self._pages.inventory.verify_loaded()
        return Catalog(self._pages)
