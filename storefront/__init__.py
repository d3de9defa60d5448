"""
Storefront UI test harness.

Page objects, the element access layer and the authenticated-session
cache used by the end-to-end suite under ``tests/e2e``.
"""

from __future__ import annotations

import logging
import os

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

__version__ = "0.1.0"
