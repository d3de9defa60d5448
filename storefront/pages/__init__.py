"""Page objects for the storefront screens."""

from storefront.pages.base_page import BasePage
from storefront.pages.inventory_page import InventoryPage, ProductDetails
from storefront.pages.login_page import LoginFailure, LoginPage, classify_login_error
from storefront.pages.product_detail_page import ProductDetailPage

__all__ = [
    "BasePage",
    "InventoryPage",
    "LoginFailure",
    "LoginPage",
    "ProductDetailPage",
    "ProductDetails",
    "classify_login_error",
]
