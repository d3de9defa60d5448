"""
Inventory Page Object.

This page object encapsulates all interactions with the product
catalog: reading products, adding and removing them from the cart,
opening product details and the side menu actions.

Key Concepts Demonstrated:
- Page-specific locators
- Products addressed by index, so no element handle leaves the page
- Seeded random selection without replacement
- Cart state read from the DOM, never tracked
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from playwright.sync_api import Page

from config import Settings
from storefront.elements import ElementHandle
from storefront.pages.base_page import CART_BADGE_TEST_ID, BasePage
from storefront.sampling import make_rng, sample_indices

logger = logging.getLogger(__name__)

ADD_TO_CART_LABEL = "Add to cart"
REMOVE_LABEL = "Remove"


@dataclass(frozen=True)
class ProductDetails:
    """Product attributes as rendered on screen."""

    name: str
    price: float
    description: str


class InventoryPage(BasePage):
    """
    Page object for the product catalog.

    Provides methods for:
    - Reading product names, prices and attributes
    - Adding/removing products by index or at random
    - Navigation to product details and the cart
    - Side menu actions (logout, reset app state)
    """

    URL_PATH = "/inventory.html"
    URL_GLOB = "**/inventory.html"

    class Locators(Enum):
        PAGE_HEADER = "title"
        INVENTORY_CONTAINER = "inventory-container"
        INVENTORY_ITEMS = "inventory-item"
        SHOPPING_CART_BADGE = CART_BADGE_TEST_ID
        SHOPPING_CART_LINK = "shopping-cart-link"
        LOGOUT_LINK = "logout-sidebar-link"
        RESET_APP_STATE_LINK = "reset-sidebar-link"
        ALL_ITEMS_LINK = "inventory-sidebar-link"
        ABOUT_LINK = "about-sidebar-link"
        BURGER_MENU_BUTTON = "css=#react-burger-menu-btn"
        CLOSE_MENU_BUTTON = "css=#react-burger-cross-btn"
        BURGER_MENU = "css=.bm-menu-wrap"

    ITEM_NAME = "inventory-item-name"
    ITEM_PRICE = "inventory-item-price"
    ITEM_DESCRIPTION = "inventory-item-desc"

    def __init__(self, page: Page, settings: Settings, rng: random.Random | None = None):
        """
        Initialize InventoryPage.

        Args:
            page: Playwright page instance.
            settings: Immutable harness settings.
            rng: Random generator for random product picks. Defaults to
                one seeded from ``settings.sample_seed``.
        """
        super().__init__(page, settings)
        self._rng = rng

    @property
    def rng(self) -> random.Random:
        if self._rng is None:
            self._rng = make_rng(self.settings.sample_seed)
        return self._rng

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate(self) -> "InventoryPage":
        """
        Navigate to the catalog page.

        Returns:
            Self for method chaining.
        """
        self.navigate_to(self.URL_PATH)
        self.wait_for_page_load()
        return self

    def wait_until_reached(self) -> None:
        """Wait for the browser to land on the catalog URL."""
        self.access.wait_for_url(self.URL_GLOB)

    # -------------------------------------------------------------------------
    # Screen state
    # -------------------------------------------------------------------------

    def is_displayed(self) -> bool:
        """Return True when the inventory container is visible."""
        return self.access.is_visible(self.element(self.Locators.INVENTORY_CONTAINER))

    def verify_loaded(self) -> None:
        """Wait for the page header and inventory container to be visible."""
        self.access.wait_until(self.element(self.Locators.PAGE_HEADER))
        self.access.wait_until(self.element(self.Locators.INVENTORY_CONTAINER))

    def get_page_header(self) -> str:
        """Get page header text."""
        return self.access.read_text(self.element(self.Locators.PAGE_HEADER))

    # -------------------------------------------------------------------------
    # Product data
    # -------------------------------------------------------------------------

    def get_inventory_items_count(self) -> int:
        """Get the number of products rendered in the catalog."""
        self.access.wait_until(self.element(self.Locators.INVENTORY_CONTAINER))
        return self.access.count(self.element(self.Locators.INVENTORY_ITEMS))

    def get_all_product_names(self) -> list[str]:
        """Get all product names in display order."""
        names = self.element(self.Locators.INVENTORY_ITEMS).child(self.ITEM_NAME)
        self.access.wait_until(self.element(self.Locators.INVENTORY_CONTAINER))
        return [name.strip() for name in self.access.all_texts(names)]

    def get_all_product_prices(self) -> list[float]:
        """Get all product prices in display order."""
        return [
            self._read_price(self._item(index).child(self.ITEM_PRICE))
            for index in range(self.get_inventory_items_count())
        ]

    def get_product_attributes(self, index: int) -> ProductDetails:
        """
        Read name, price and description of the product at ``index``.

        Args:
            index: Zero-based product position.

        Returns:
            ProductDetails for the product.
        """
        item = self._item(index)
        return ProductDetails(
            name=self.access.read_text(item.child(self.ITEM_NAME)).strip(),
            price=self._read_price(item.child(self.ITEM_PRICE)),
            description=self.access.read_text(item.child(self.ITEM_DESCRIPTION)).strip(),
        )

    def pick_random_product(self) -> int:
        """Return the index of a random product."""
        return sample_indices(self.get_inventory_items_count(), 1, self.rng)[0]

    # -------------------------------------------------------------------------
    # Cart actions
    # -------------------------------------------------------------------------

    def add_product_to_cart_by_index(self, index: int) -> int:
        """
        Add the product at ``index`` to the cart.

        Returns:
            The index, for chaining into other index-based calls.
        """
        logger.debug("Adding product %d to cart", index)
        self.access.click(self._item(index).button(ADD_TO_CART_LABEL))
        return index

    def add_random_product_to_cart(self) -> int:
        """
        Add one random product to the cart.

        Returns:
            Index of the product added.
        """
        return self.add_product_to_cart_by_index(self.pick_random_product())

    def add_random_products_to_cart(self, count: int) -> list[int]:
        """
        Add ``count`` distinct random products to the cart.

        Args:
            count: Number of products to add.

        Returns:
            Indices of the products added, in the order they were added.

        Raises:
            ValueError: If the catalog holds fewer than ``count`` products.
        """
        indices = sample_indices(self.get_inventory_items_count(), count, self.rng)
        for index in indices:
            self.add_product_to_cart_by_index(index)
        return indices

    def remove_product_from_cart(self, index: int) -> None:
        """Remove the product at ``index`` from the cart."""
        logger.debug("Removing product %d from cart", index)
        self.access.click(self._item(index).button(REMOVE_LABEL))

    def get_cart_item_count(self) -> int:
        """Get the cart badge count; 0 when the badge is absent."""
        return self._read_cart_badge(self.element(self.Locators.SHOPPING_CART_BADGE))

    # -------------------------------------------------------------------------
    # Navigation actions
    # -------------------------------------------------------------------------

    def go_to_product_details(self, index: int) -> None:
        """Open the detail page of the product at ``index`` via its name link."""
        self.access.click(self._item(index).child(self.ITEM_NAME))
        self.wait_for_page_load()

    def go_to_cart(self) -> None:
        """Click on the shopping cart."""
        self.access.click(self.element(self.Locators.SHOPPING_CART_LINK))
        self.wait_for_page_load()

    def open_menu(self) -> None:
        """Open the burger menu and wait for it to slide in."""
        self.access.click(self.element(self.Locators.BURGER_MENU_BUTTON))
        self.access.wait_until(self.element(self.Locators.BURGER_MENU), "visible")

    def close_menu(self) -> None:
        """Close the burger menu and wait for it to hide."""
        self.access.click(self.element(self.Locators.CLOSE_MENU_BUTTON))
        self.access.wait_until(self.element(self.Locators.BURGER_MENU), "hidden")

    def logout(self) -> None:
        """Log out via the side menu."""
        self.open_menu()
        self.access.click(self.element(self.Locators.LOGOUT_LINK))
        self.wait_for_page_load()

    def reset_app_state(self) -> None:
        """Reset the storefront's app state via the side menu."""
        self.open_menu()
        self.access.click(self.element(self.Locators.RESET_APP_STATE_LINK))
        self.close_menu()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _item(self, index: int) -> ElementHandle:
        count = self.get_inventory_items_count()
        if not 0 <= index < count:
            raise IndexError(f"Product index {index} out of range for {count} products")
        return self.element(self.Locators.INVENTORY_ITEMS).nth(index)
