"""
Unit tests for the session bootstrap command line.

Key SDET Concepts Demonstrated:
- Patching the browser launcher so the CLI runs without Playwright
- Asserting on process exit codes
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError

from storefront import cli
from storefront.errors import SessionBootstrapError

pytestmark = pytest.mark.unit


@pytest.fixture
def playwright_mock():
    """Patched sync_playwright yielding a MagicMock Playwright instance."""
    playwright = MagicMock()
    with patch("storefront.cli.sync_playwright") as sync_playwright:
        sync_playwright.return_value.__enter__.return_value = playwright
        yield playwright


@pytest.fixture(autouse=True)
def fixed_settings(settings):
    with patch("storefront.cli.load_settings", return_value=settings):
        yield settings


class TestMain:
    """Tests for cli.main()."""

    def test_success_writes_artifact(self, playwright_mock, settings, capsys):
        """Test that a successful bootstrap exits 0 and prints the path."""
        with patch("storefront.cli.bootstrap_session") as bootstrap:
            # Act
            code = cli.main([])

        # Assert
        assert code == cli.EXIT_OK
        browser = playwright_mock.chromium.launch.return_value
        bootstrap.assert_called_once_with(browser, settings, path=settings.storage_state_path)
        browser.close.assert_called_once()
        playwright_mock.selectors.set_test_id_attribute.assert_called_once_with("data-test")
        assert str(settings.storage_state_path) in capsys.readouterr().out

    def test_options_override_settings(self, playwright_mock, settings, tmp_path: Path):
        """Test --browser, --output and --headed."""
        output = tmp_path / "custom.json"

        with patch("storefront.cli.bootstrap_session") as bootstrap:
            code = cli.main(["--browser", "firefox", "--output", str(output), "--headed"])

        assert code == cli.EXIT_OK
        playwright_mock.firefox.launch.assert_called_once_with(headless=False)
        assert bootstrap.call_args.kwargs["path"] == output

    def test_login_failure_exits_one(self, playwright_mock):
        """Test that a rejected login maps to exit code 1."""
        error = SessionBootstrapError("standard_user", "bootstrap session", "still at /")

        with patch("storefront.cli.bootstrap_session", side_effect=error):
            code = cli.main([])

        assert code == cli.EXIT_LOGIN_FAILED
        playwright_mock.chromium.launch.return_value.close.assert_called_once()

    def test_browser_error_exits_two(self, playwright_mock):
        """Test that a browser that cannot launch maps to exit code 2."""
        playwright_mock.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

        code = cli.main([])

        assert code == cli.EXIT_SCRIPT_ERROR

    def test_unknown_configured_browser_exits_two(self):
        """Test that an unsupported DEFAULT_BROWSER is rejected before launching."""
        bad_settings = MagicMock(browser_name="netscape")

        with patch("storefront.cli.load_settings", return_value=bad_settings):
            assert cli.main([]) == cli.EXIT_SCRIPT_ERROR

    def test_invalid_browser_option_is_a_usage_error(self):
        """Test that argparse rejects unknown --browser values."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--browser", "netscape"])

        assert exc_info.value.code == 2

    def test_wait_polls_site_first(self, playwright_mock, settings):
        """Test that --wait polls the storefront before launching."""
        with patch("storefront.cli.wait_for_site") as wait, patch(
            "storefront.cli.bootstrap_session"
        ):
            code = cli.main(["--wait", "10"])

        assert code == cli.EXIT_OK
        wait.assert_called_once_with(settings.base_url, timeout=10)

    def test_unreachable_site_exits_two(self, playwright_mock):
        """Test that a storefront that never answers maps to exit code 2."""
        with patch(
            "storefront.cli.wait_for_site", side_effect=RuntimeError("not reachable after 10s")
        ):
            code = cli.main(["--wait", "10"])

        assert code == cli.EXIT_SCRIPT_ERROR
        playwright_mock.chromium.launch.assert_not_called()
