"""Reachability helpers for the storefront under test."""

from __future__ import annotations

import logging
import time

import requests

logger = logging.getLogger(__name__)


def is_site_reachable(url: str, timeout: float = 5) -> bool:
    """Return True when ``url`` answers with a non-5xx status."""
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        logger.debug("Storefront at %s unreachable: %s", url, exc)
        return False
    return response.status_code < 500


def wait_for_site(url: str, timeout: int = 30, interval: int = 1) -> None:
    """
    Poll the storefront until it answers or ``timeout`` seconds pass.

    Raises:
        RuntimeError: If the storefront never became reachable.
    """
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_site_reachable(url, timeout=min(5, timeout)):
            return
        time.sleep(interval)
    raise RuntimeError(f"Storefront at {url} not reachable after {timeout}s")
