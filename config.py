"""
Harness configuration module.

This module defines configuration classes for the environments the
harness runs in (local workstation, CI). Values are loaded from
environment variables, optionally seeded from a ``.env`` file, with
sensible defaults for the public demo storefront.

Configuration is read once: ``load_settings`` freezes the selected
class into an immutable ``Settings`` snapshot that is handed to page
objects, the session bootstrap and fixtures as plain parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Directory the harness is run from; relative paths and .env resolve here
RUN_DIR = Path.cwd()

load_dotenv(RUN_DIR / ".env")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_optional_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Base configuration with default settings."""

    BASE_URL: str = os.environ.get("BASE_URL", "https://www.saucedemo.com")

    # User credentials
    STANDARD_USER: str = os.environ.get("STANDARD_USER", "standard_user")
    STANDARD_PASSWORD: str = os.environ.get("STANDARD_PASSWORD", "secret_sauce")
    LOCKED_OUT_USER: str = os.environ.get("LOCKED_OUT_USER", "locked_out_user")

    # Browser configuration
    DEFAULT_BROWSER: str = os.environ.get("DEFAULT_BROWSER", "chromium")
    HEADLESS: bool = _env_bool("HEADLESS", True)
    TEST_ID_ATTRIBUTE: str = os.environ.get("TEST_ID_ATTRIBUTE", "data-test")

    # Timeouts (milliseconds)
    ACTION_TIMEOUT: int = _env_int("ACTION_TIMEOUT", 15000)
    NAVIGATION_TIMEOUT: int = _env_int("NAVIGATION_TIMEOUT", 30000)
    DEFAULT_TIMEOUT: int = _env_int("DEFAULT_TIMEOUT", 30000)

    # Retry count consumed by the external runner
    RETRY_COUNT: int = _env_int("RETRY_COUNT", 0)

    # Persisted authenticated session
    STORAGE_STATE_PATH: Path = Path(
        os.environ.get(
            "STORAGE_STATE_PATH",
            str(RUN_DIR / "tests" / ".auth" / "storage-state.json"),
        )
    )

    # Seed for random catalog sampling; None draws (and logs) a fresh seed
    SAMPLE_SEED: int | None = _env_optional_int("SAMPLE_SEED")

    SCREENSHOT_ON_FAILURE: bool = _env_bool("SCREENSHOT_ON_FAILURE", True)
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


class LocalConfig(Config):
    """Local workstation configuration."""


class CIConfig(Config):
    """Continuous integration configuration."""

    RETRY_COUNT: int = _env_int("RETRY_COUNT", 2)
    HEADLESS: bool = True


# Configuration mapping for easy access
config = {
    "local": LocalConfig,
    "ci": CIConfig,
    "default": LocalConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (local, ci).
             If None, uses HARNESS_ENV, falling back to "ci" when the
             CI environment variable is set.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("HARNESS_ENV") or ("ci" if os.environ.get("CI") else "local")
    return config.get(env, config["default"])


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the configuration surface."""

    base_url: str
    standard_user: str
    standard_password: str
    locked_out_user: str
    browser_name: str
    headless: bool
    test_id_attribute: str
    action_timeout_ms: int
    navigation_timeout_ms: int
    default_timeout_ms: int
    retry_count: int
    storage_state_path: Path
    sample_seed: int | None
    screenshot_on_failure: bool
    log_level: str

    def url(self, path: str = "") -> str:
        """Join a path onto the base URL without doubling slashes."""
        if not path:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def load_settings(env: str | None = None) -> Settings:
    """
    Freeze the configuration for ``env`` into a ``Settings`` snapshot.

    Args:
        env: Environment name passed to :func:`get_config`.

    Returns:
        Settings built from the selected configuration class.
    """
    config_class = get_config(env)
    return Settings(
        base_url=config_class.BASE_URL.rstrip("/"),
        standard_user=config_class.STANDARD_USER,
        standard_password=config_class.STANDARD_PASSWORD,
        locked_out_user=config_class.LOCKED_OUT_USER,
        browser_name=config_class.DEFAULT_BROWSER,
        headless=config_class.HEADLESS,
        test_id_attribute=config_class.TEST_ID_ATTRIBUTE,
        action_timeout_ms=config_class.ACTION_TIMEOUT,
        navigation_timeout_ms=config_class.NAVIGATION_TIMEOUT,
        default_timeout_ms=config_class.DEFAULT_TIMEOUT,
        retry_count=config_class.RETRY_COUNT,
        storage_state_path=Path(config_class.STORAGE_STATE_PATH),
        sample_seed=config_class.SAMPLE_SEED,
        screenshot_on_failure=config_class.SCREENSHOT_ON_FAILURE,
        log_level=config_class.LOG_LEVEL,
    )
