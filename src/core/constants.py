"""Core constants used across crawlstore modules.

This module centralizes storage layout and protocol limits.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

IMAGE_KEY_PREFIX = "images"
MAX_BATCH_WRITE_ITEMS = 25
PRICE_DECIMAL_PLACES = 2
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DOWNLOAD_CHUNK_SIZE = 64 * 1024
SPOOL_MAX_BYTES = 8 * 1024 * 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"
EXIT_CODE_SUCCESS = 0
EXIT_CODE_FAILURE = 1
