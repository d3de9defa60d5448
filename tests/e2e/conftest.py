"""
Playwright fixtures for storefront E2E tests.

This module wires pytest-playwright's browser into the harness: the
test-id attribute is registered once per run, the authenticated session
is bootstrapped once (or reused from disk with ``--skip-bootstrap``) and
each test gets a fresh browser context.

Key Concepts Demonstrated:
- Login once, reuse the session in isolated contexts
- Marker-driven fixtures (``@pytest.mark.authenticated``)
- Screenshot capture on failure
"""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from playwright.sync_api import Browser, BrowserContext, Page, Playwright

from config import Settings
from storefront.elements import configure_test_id_attribute
from storefront.errors import SessionBootstrapError
from storefront.flows import Storefront
from storefront.live_site import is_site_reachable
from storefront.pages.inventory_page import InventoryPage
from storefront.pages.login_page import LoginPage
from storefront.pages.product_detail_page import ProductDetailPage
from storefront.session import bootstrap_session, load_session_artifact, new_authenticated_context

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Site and Browser Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def storefront_url(settings: Settings) -> str:
    """Base URL of the storefront; skips the E2E run when it cannot be reached."""
    if not is_site_reachable(settings.base_url):
        pytest.skip(f"Storefront at {settings.base_url} is not reachable")
    return settings.base_url


@pytest.fixture(scope="session", autouse=True)
def test_id_attribute(playwright: Playwright, settings: Settings) -> str:
    """Register the storefront's test-id attribute with Playwright's selectors."""
    configure_test_id_attribute(playwright, settings.test_id_attribute)
    return settings.test_id_attribute


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args: dict) -> dict:
    """
    Configure browser context options.

    Returns:
        dict: pytest-playwright's defaults extended with the harness options.
    """
    return {
        **browser_context_args,
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }


# -----------------------------------------------------------------------------
# Session Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def session_artifact(
    request,
    browser: Browser,
    browser_context_args: dict,
    settings: Settings,
    session_artifact_path: Path,
    storefront_url: str,
) -> Path:
    """
    Produce the session artifact once per run.

    With ``--skip-bootstrap`` the artifact written by an earlier
    ``storefront-bootstrap`` run is used as is. A failed bootstrap ends
    the run: every authenticated test would fail the same way.

    Returns:
        Path: Location of the artifact dependent tests load.
    """
    if request.config.getoption("--skip-bootstrap"):
        logger.info("Skipping session bootstrap; reusing %s", session_artifact_path)
        return session_artifact_path
    try:
        bootstrap_session(
            browser, settings, path=session_artifact_path, context_args=browser_context_args
        )
    except SessionBootstrapError as exc:
        pytest.exit(f"Session bootstrap failed: {exc}", returncode=1)
    return session_artifact_path


@pytest.fixture(scope="function")
def context(
    request,
    browser: Browser,
    browser_context_args: dict,
    settings: Settings,
) -> Generator[BrowserContext, None, None]:
    """
    Create a fresh browser context for each test.

    Tests marked ``authenticated`` get a context seeded from the session
    artifact; a missing or unusable artifact errors that test only.

    Yields:
        BrowserContext: Fresh browser context.
    """
    if request.node.get_closest_marker("authenticated"):
        artifact = load_session_artifact(request.getfixturevalue("session_artifact"))
        context = new_authenticated_context(browser, artifact, **browser_context_args)
    else:
        context = browser.new_context(**browser_context_args)
    context.set_default_timeout(settings.default_timeout_ms)
    context.set_default_navigation_timeout(settings.navigation_timeout_ms)
    yield context
    context.close()


@pytest.fixture(scope="function")
def page(context: BrowserContext, storefront_url: str) -> Generator[Page, None, None]:
    """
    Create a new page (tab) for each test.

    Yields:
        Page: Playwright page object.
    """
    page = context.new_page()
    yield page
    page.close()


# -----------------------------------------------------------------------------
# Page Object Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def login_page(page: Page, settings: Settings) -> LoginPage:
    return LoginPage(page, settings)


@pytest.fixture
def inventory_page(page: Page, settings: Settings) -> InventoryPage:
    return InventoryPage(page, settings)


@pytest.fixture
def product_detail_page(page: Page, settings: Settings) -> ProductDetailPage:
    return ProductDetailPage(page, settings)


@pytest.fixture
def storefront(page: Page, settings: Settings) -> Storefront:
    return Storefront(page, settings)


# -----------------------------------------------------------------------------
# Screenshot on Failure
# -----------------------------------------------------------------------------

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture screenshot on E2E test failure."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        settings = item.funcargs.get("settings")
        page = item.funcargs.get("page")
        if page and settings is not None and settings.screenshot_on_failure:
            screenshot_dir = "test-results/screenshots"
            os.makedirs(screenshot_dir, exist_ok=True)
            test_name = item.name.replace("/", "_").replace("::", "_")
            screenshot_path = f"{screenshot_dir}/{test_name}.png"
            try:
                page.screenshot(path=screenshot_path)
                logger.info("Screenshot saved: %s", screenshot_path)
            except Exception as exc:  # pragma: no cover - best effort logging
                logger.warning("Failed to capture screenshot: %s", exc)
