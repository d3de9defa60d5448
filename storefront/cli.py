"""
Command line entry point for the session bootstrap.

Runs the one-time interactive login outside pytest so a scheduler can
order it explicitly before any test that reuses the session, e.g.::

    storefront-bootstrap --output tests/.auth/storage-state.json
    pytest -m e2e --run-e2e --skip-bootstrap

Exit codes:

- ``0``: session artifact written
- ``1``: the login did not reach the catalog
- ``2``: the script itself failed (browser missing, site unreachable, ...)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from config import load_settings
from storefront.elements import configure_test_id_attribute
from storefront.errors import SessionBootstrapError
from storefront.live_site import wait_for_site
from storefront.session import bootstrap_session

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOGIN_FAILED = 1
EXIT_SCRIPT_ERROR = 2

BROWSERS = ("chromium", "firefox", "webkit")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the session bootstrap."""
    parser = argparse.ArgumentParser(
        description="Log in once and persist the authenticated session for the E2E suite."
    )
    parser.add_argument(
        "--env",
        default=None,
        help="Configuration environment (local, ci); defaults to HARNESS_ENV",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Artifact path; defaults to STORAGE_STATE_PATH",
    )
    parser.add_argument(
        "--browser",
        choices=BROWSERS,
        default=None,
        help="Browser engine; defaults to DEFAULT_BROWSER",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    parser.add_argument(
        "--wait",
        type=int,
        default=0,
        metavar="SECONDS",
        help="Poll the storefront for up to SECONDS before launching the browser",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the bootstrap and return a process exit code."""
    args = parse_args(argv)
    settings = load_settings(args.env)
    browser_name = args.browser or settings.browser_name
    if browser_name not in BROWSERS:
        logger.error("Unknown browser %r; expected one of %s", browser_name, BROWSERS)
        return EXIT_SCRIPT_ERROR
    output = args.output or settings.storage_state_path

    if args.wait > 0:
        try:
            wait_for_site(settings.base_url, timeout=args.wait)
        except RuntimeError as exc:
            logger.error("%s", exc)
            return EXIT_SCRIPT_ERROR

    try:
        with sync_playwright() as playwright:
            configure_test_id_attribute(playwright, settings.test_id_attribute)
            browser = getattr(playwright, browser_name).launch(
                headless=settings.headless and not args.headed
            )
            try:
                bootstrap_session(browser, settings, path=output)
            finally:
                browser.close()
    except SessionBootstrapError as exc:
        logger.error("%s", exc)
        return EXIT_LOGIN_FAILED
    except (PlaywrightError, OSError) as exc:
        logger.error("Session bootstrap could not run: %s", exc)
        return EXIT_SCRIPT_ERROR

    print(f"Session artifact written: {output}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
