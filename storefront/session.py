"""
Authenticated session caching.

A real login is performed once (``bootstrap_session``) and the resulting
browser identity is written to a JSON artifact. Every dependent test then
seeds a fresh browser context from that artifact
(``new_authenticated_context``) instead of logging in again.

Key Concepts Demonstrated:
- Immutable snapshot passed by copy into each context
- Atomic artifact writes so readers never observe a half-written file
- Typed failures: bootstrap failure is fatal to the run, a missing or
  unusable artifact is fatal to the dependent test only
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from playwright.sync_api import Browser, BrowserContext, Page
from playwright.sync_api import Error as PlaywrightError

from config import Settings
from storefront.errors import (
    InteractionError,
    SessionBootstrapError,
    SessionUnavailableError,
    WaitTimeoutError,
)
from storefront.pages.inventory_page import InventoryPage
from storefront.pages.login_page import LoginPage

logger = logging.getLogger(__name__)

SESSION_COOKIE_EXPIRY = -1

_READ_SESSION_STORAGE = "() => Object.entries(window.sessionStorage)"
_READ_ORIGIN = "() => window.location.origin"


# -----------------------------------------------------------------------------
# Artifact model
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SessionCookie:
    """One cookie of the persisted browser identity."""

    name: str
    value: str
    domain: str
    path: str = "/"
    expires: float = SESSION_COOKIE_EXPIRY
    http_only: bool = False
    secure: bool = False
    same_site: str = "Lax"

    def is_expired(self, now: float) -> bool:
        """Return True for a persistent cookie whose expiry has passed."""
        return self.expires != SESSION_COOKIE_EXPIRY and self.expires <= now

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path,
            "expires": self.expires,
            "httpOnly": self.http_only,
            "secure": self.secure,
            "sameSite": self.same_site,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionCookie":
        return cls(
            name=str(data["name"]),
            value=str(data["value"]),
            domain=str(data["domain"]),
            path=str(data.get("path", "/")),
            expires=float(data.get("expires", SESSION_COOKIE_EXPIRY)),
            http_only=bool(data.get("httpOnly", False)),
            secure=bool(data.get("secure", False)),
            same_site=str(data.get("sameSite", "Lax")),
        )


def _pairs_to_list(pairs: tuple[tuple[str, str], ...]) -> list[dict[str, str]]:
    return [{"name": name, "value": value} for name, value in pairs]


def _list_to_pairs(items: list[dict[str, Any]]) -> tuple[tuple[str, str], ...]:
    return tuple((str(item["name"]), str(item["value"])) for item in items)


@dataclass(frozen=True)
class OriginStorage:
    """Web storage of a single origin."""

    origin: str
    local_storage: tuple[tuple[str, str], ...] = ()
    session_storage: tuple[tuple[str, str], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "origin": self.origin,
            "localStorage": _pairs_to_list(self.local_storage),
            "sessionStorage": _pairs_to_list(self.session_storage),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OriginStorage":
        return cls(
            origin=str(data["origin"]),
            local_storage=_list_to_pairs(data.get("localStorage", [])),
            session_storage=_list_to_pairs(data.get("sessionStorage", [])),
        )


@dataclass(frozen=True)
class SessionArtifact:
    """
    Serialized snapshot of a browser context's authentication state.

    The on-disk format is a superset of Playwright's storage state: each
    origin additionally carries its ``sessionStorage`` entries.

    Attributes:
        cookies: Cookies of the authenticated context.
        origins: Per-origin local and session storage.
    """

    cookies: tuple[SessionCookie, ...] = ()
    origins: tuple[OriginStorage, ...] = field(default_factory=tuple)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "cookies": [cookie.to_dict() for cookie in self.cookies],
            "origins": [origin.to_dict() for origin in self.origins],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionArtifact":
        return cls(
            cookies=tuple(SessionCookie.from_dict(item) for item in data.get("cookies", [])),
            origins=tuple(OriginStorage.from_dict(item) for item in data.get("origins", [])),
        )

    @classmethod
    def from_storage_state(
        cls,
        storage_state: dict[str, Any],
        session_storage: dict[str, tuple[tuple[str, str], ...]] | None = None,
    ) -> "SessionArtifact":
        """
        Build an artifact from Playwright's ``storage_state()`` output.

        Args:
            storage_state: Dict returned by ``BrowserContext.storage_state``.
            session_storage: sessionStorage entries keyed by origin.

        Returns:
            SessionArtifact combining both sources.
        """
        artifact = cls.from_dict(storage_state)
        session_storage = dict(session_storage or {})
        origins = []
        for origin in artifact.origins:
            entries = session_storage.pop(origin.origin, ())
            origins.append(
                OriginStorage(origin.origin, origin.local_storage, tuple(entries))
            )
        for origin_name, entries in session_storage.items():
            if entries:
                origins.append(OriginStorage(origin_name, (), tuple(entries)))
        return cls(cookies=artifact.cookies, origins=tuple(origins))

    def to_storage_state(self) -> dict[str, Any]:
        """
        Return a fresh Playwright storage-state dict.

        A new dict is built on every call, so no two contexts ever share
        (or can mutate) the same structure.
        """
        return {
            "cookies": [cookie.to_dict() for cookie in self.cookies],
            "origins": [
                {"origin": origin.origin, "localStorage": _pairs_to_list(origin.local_storage)}
                for origin in self.origins
            ],
        }

    def session_storage_by_origin(self) -> dict[str, list[list[str]]]:
        return {
            origin.origin: [[name, value] for name, value in origin.session_storage]
            for origin in self.origins
            if origin.session_storage
        }

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, source: str, now: float | None = None) -> None:
        """
        Check the artifact can authenticate a context.

        Args:
            source: Where the artifact came from, for error messages.
            now: Epoch seconds to compare cookie expiry against.

        Raises:
            SessionUnavailableError: If there are no cookies or all expired.
        """
        if not self.cookies:
            raise SessionUnavailableError(source, "validate session artifact", "no cookies stored")
        now = time.time() if now is None else now
        if all(cookie.is_expired(now) for cookie in self.cookies):
            raise SessionUnavailableError(
                source, "validate session artifact", "every stored cookie has expired"
            )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """
        Write the artifact as JSON, atomically replacing any previous file.

        Args:
            path: Destination file.

        Returns:
            The path written.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self.to_dict(), handle, indent=2, sort_keys=True)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return path


def load_session_artifact(path: Path, now: float | None = None) -> SessionArtifact:
    """
    Read and validate a persisted session.

    Args:
        path: Artifact file written by :func:`bootstrap_session`.
        now: Epoch seconds for the expiry check (defaults to the clock).

    Returns:
        The validated SessionArtifact.

    Raises:
        SessionUnavailableError: If the file is missing, unreadable,
            malformed, empty or expired.
    """
    path = Path(path)
    source = str(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise SessionUnavailableError(
            source, "load session artifact", "file does not exist; run the session bootstrap first"
        ) from exc
    except OSError as exc:
        raise SessionUnavailableError(source, "load session artifact", str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise SessionUnavailableError(
            source, "load session artifact", f"invalid JSON: {exc}"
        ) from exc

    if not isinstance(data, dict):
        raise SessionUnavailableError(
            source, "load session artifact", "top-level JSON value is not an object"
        )
    try:
        artifact = SessionArtifact.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SessionUnavailableError(
            source, "load session artifact", f"malformed entry: {exc!r}"
        ) from exc

    artifact.validate(source, now=now)
    logger.info(
        "Loaded session artifact %s (%d cookies, %d origins)",
        source,
        len(artifact.cookies),
        len(artifact.origins),
    )
    return artifact


# -----------------------------------------------------------------------------
# Bootstrap
# -----------------------------------------------------------------------------

def _capture_session_storage(page: Page) -> dict[str, tuple[tuple[str, str], ...]]:
    origin = page.evaluate(_READ_ORIGIN)
    entries = page.evaluate(_READ_SESSION_STORAGE) or []
    return {origin: tuple((str(name), str(value)) for name, value in entries)}


def bootstrap_session(
    browser: Browser,
    settings: Settings,
    path: Path | None = None,
    context_args: dict[str, Any] | None = None,
) -> SessionArtifact:
    """
    Log in once and persist the resulting session.

    Args:
        browser: Browser to open the bootstrap context in.
        settings: Harness settings (base URL, credentials, timeouts).
        path: Artifact destination; defaults to ``settings.storage_state_path``.
        context_args: Extra ``new_context`` keyword arguments.

    Returns:
        The SessionArtifact that was written.

    Raises:
        SessionBootstrapError: If the login did not reach the catalog.
    """
    path = Path(path or settings.storage_state_path)
    logger.info("Bootstrapping session for %s at %s", settings.standard_user, settings.base_url)

    context = browser.new_context(**(context_args or {}))
    try:
        page = context.new_page()
        login_page = LoginPage(page, settings)
        inventory_page = InventoryPage(page, settings)
        try:
            login_page.navigate()
            login_page.login_standard_user()
            inventory_page.wait_until_reached()
        except (WaitTimeoutError, InteractionError, PlaywrightError) as exc:
            detail = str(exc)
            if login_page.is_error_displayed():
                detail = f"{detail}; login error: {login_page.get_error_message()}"
            logger.error("Session bootstrap failed: %s", detail)
            raise SessionBootstrapError(
                settings.standard_user, "bootstrap session", detail
            ) from exc

        artifact = SessionArtifact.from_storage_state(
            context.storage_state(), _capture_session_storage(page)
        )
    finally:
        context.close()

    artifact.validate(str(path))
    artifact.save(path)
    logger.info("Session artifact written to %s", path)
    return artifact


# -----------------------------------------------------------------------------
# Reuse
# -----------------------------------------------------------------------------

def _session_storage_script(entries: dict[str, list[list[str]]]) -> str:
    payload = json.dumps(entries)
    return (
        "(() => {\n"
        f"  const entries = {payload};\n"
        "  const items = entries[window.location.origin];\n"
        "  if (!items) { return; }\n"
        "  for (const [name, value] of items) {\n"
        "    if (window.sessionStorage.getItem(name) === null) {\n"
        "      window.sessionStorage.setItem(name, value);\n"
        "    }\n"
        "  }\n"
        "})();"
    )


def new_authenticated_context(
    browser: Browser, artifact: SessionArtifact, **context_args: Any
) -> BrowserContext:
    """
    Create a fresh browser context seeded from ``artifact``.

    Cookies and localStorage are restored through Playwright's storage
    state; sessionStorage through an init script scoped to its origin.

    Args:
        browser: Browser to open the context in.
        artifact: Validated session artifact.
        **context_args: Extra ``new_context`` keyword arguments.

    Returns:
        BrowserContext owned by the caller, who must close it.
    """
    context_args.pop("storage_state", None)
    context = browser.new_context(storage_state=artifact.to_storage_state(), **context_args)
    session_entries = artifact.session_storage_by_origin()
    if session_entries:
        context.add_init_script(script=_session_storage_script(session_entries))
    return context
