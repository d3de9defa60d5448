"""
Fixtures for browser-free unit tests.

Page objects are driven against the in-memory fakes in
``tests/unit/fakes.py`` so their contracts can be checked without
launching a browser or reaching the network.
"""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from config import Settings
from storefront.pages.inventory_page import InventoryPage
from storefront.pages.login_page import LoginPage
from storefront.pages.product_detail_page import ProductDetailPage
from tests.unit.fakes import BASE_URL, FakeBrowser, FakePage, FakeStorefront


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Deterministic settings pointing at the fake storefront."""
    return Settings(
        base_url=BASE_URL,
        standard_user="standard_user",
        standard_password="secret_sauce",
        locked_out_user="locked_out_user",
        browser_name="chromium",
        headless=True,
        test_id_attribute="data-test",
        action_timeout_ms=1000,
        navigation_timeout_ms=2000,
        default_timeout_ms=5000,
        retry_count=0,
        storage_state_path=tmp_path / ".auth" / "storage-state.json",
        sample_seed=1234,
        screenshot_on_failure=False,
        log_level="DEBUG",
    )


@pytest.fixture
def store() -> FakeStorefront:
    """Fresh storefront model, logged out on the login screen."""
    return FakeStorefront()


@pytest.fixture
def fake_page(store: FakeStorefront) -> FakePage:
    return FakePage(store)


@pytest.fixture
def logged_in_store(store: FakeStorefront) -> FakeStorefront:
    """Storefront model already logged in and showing the catalog."""
    store.logged_in_as = "standard_user"
    store.screen = "inventory"
    return store


@pytest.fixture
def fake_browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def login_page(fake_page: FakePage, settings: Settings) -> LoginPage:
    return LoginPage(fake_page, settings)


@pytest.fixture
def inventory_page(fake_page: FakePage, settings: Settings) -> InventoryPage:
    return InventoryPage(fake_page, settings, rng=random.Random(42))


@pytest.fixture
def product_detail_page(fake_page: FakePage, settings: Settings) -> ProductDetailPage:
    return ProductDetailPage(fake_page, settings)
