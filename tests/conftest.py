"""
Shared pytest configuration for the storefront harness suite.

Key Concepts Demonstrated:
- Command line options that select how the session cache is produced
- Opt-in E2E runs: browser tests are skipped unless explicitly requested
- Session-scoped, immutable settings shared by every fixture
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from config import Settings, load_settings


def pytest_addoption(parser):
    """Register harness command line options."""
    group = parser.getgroup("storefront", "storefront UI harness")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run browser E2E tests against the live storefront (or set RUN_E2E=1).",
    )
    group.addoption(
        "--skip-bootstrap",
        action="store_true",
        default=False,
        help="Reuse an existing session artifact instead of logging in once at startup.",
    )
    group.addoption(
        "--session-artifact",
        action="store",
        default=None,
        help="Path of the session artifact (defaults to STORAGE_STATE_PATH).",
    )


def _e2e_enabled(config) -> bool:
    return bool(config.getoption("--run-e2e")) or os.environ.get("RUN_E2E") == "1"


def pytest_collection_modifyitems(config, items):
    """Skip E2E tests unless they were explicitly requested."""
    if _e2e_enabled(config):
        return
    skip_e2e = pytest.mark.skip(reason="E2E tests need --run-e2e or RUN_E2E=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture(scope="session")
def settings() -> Settings:
    """Immutable harness settings, read once for the whole run."""
    return load_settings()


@pytest.fixture(scope="session")
def session_artifact_path(request, settings: Settings) -> Path:
    """Where the session bootstrap writes, and reuse reads, the artifact."""
    option = request.config.getoption("--session-artifact")
    return Path(option) if option else settings.storage_state_path
