"""Product detail page object for the single-item view."""

from __future__ import annotations

from enum import Enum

from playwright.sync_api import Page

from config import Settings
from storefront.pages.base_page import CART_BADGE_TEST_ID, BasePage
from storefront.pages.inventory_page import ProductDetails


class ProductDetailPage(BasePage):
    """
    Page object for an individual product page.

    Mirrors the catalog's add/remove/cart-count operations for a single
    item and navigates back to the catalog.
    """

    URL_GLOB = "**/inventory-item.html*"

    class Locators(Enum):
        BACK_BUTTON = "back-to-products"
        PRODUCT_NAME = "inventory-item-name"
        PRODUCT_DESCRIPTION = "inventory-item-desc"
        PRODUCT_PRICE = "inventory-item-price"
        ADD_TO_CART_BUTTON = "add-to-cart"
        REMOVE_BUTTON = "remove"
        SHOPPING_CART_BADGE = CART_BADGE_TEST_ID

    def __init__(self, page: Page, settings: Settings):
        """
        Initialize ProductDetailPage.

        Args:
            page: Playwright page instance.
            settings: Immutable harness settings.
        """
        super().__init__(page, settings)

    def wait_until_reached(self) -> None:
        """Wait for the browser to land on a product detail URL."""
        self.access.wait_for_url(self.URL_GLOB)

    def is_displayed(self) -> bool:
        """Return True when the product name is visible."""
        return self.access.is_visible(self.element(self.Locators.PRODUCT_NAME))

    def verify_loaded(self) -> None:
        """Wait for the product name and back button to be visible."""
        self.access.wait_until(self.element(self.Locators.PRODUCT_NAME))
        self.access.wait_until(self.element(self.Locators.BACK_BUTTON))

    def get_product_name(self) -> str:
        return self.access.read_text(self.element(self.Locators.PRODUCT_NAME)).strip()

    def get_product_description(self) -> str:
        return self.access.read_text(self.element(self.Locators.PRODUCT_DESCRIPTION)).strip()

    def get_product_price(self) -> float:
        return self._read_price(self.element(self.Locators.PRODUCT_PRICE))

    def get_product_details(self) -> ProductDetails:
        """Read name, price and description shown on the page."""
        return ProductDetails(
            name=self.get_product_name(),
            price=self.get_product_price(),
            description=self.get_product_description(),
        )

    def add_to_cart(self) -> None:
        """Add the displayed product to the cart."""
        self.access.click(self.element(self.Locators.ADD_TO_CART_BUTTON))

    def remove_from_cart(self) -> None:
        """Remove the displayed product from the cart."""
        self.access.click(self.element(self.Locators.REMOVE_BUTTON))

    def go_back_to_products(self) -> None:
        """Return to the catalog."""
        self.access.click(self.element(self.Locators.BACK_BUTTON))
        self.wait_for_page_load()

    def get_cart_item_count(self) -> int:
        """Get the cart badge count; 0 when the badge is absent."""
        return self._read_cart_badge(self.element(self.Locators.SHOPPING_CART_BADGE))
