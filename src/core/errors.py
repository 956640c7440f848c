"""Crawlstore exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class CrawlStoreError(Exception):
    """Base exception for all crawlstore failures."""


class CrawlStoreConfigError(CrawlStoreError):
    """Raised for missing or invalid runtime configuration."""


class CrawlStoreDependencyError(CrawlStoreError):
    """Raised when a required runtime dependency is missing."""


class CrawlStoreIngestError(CrawlStoreError):
    """Raised for crawler payload parsing failures."""


class CrawlStoreCancelledError(CrawlStoreError):
    """Raised when a caller deadline expires mid-operation."""


class ImageDownloadError(CrawlStoreError):
    """Raised when an image cannot be fetched from its source URL.

    Attributes:
        url: Source image URL.
        status_code: HTTP status for non-success responses, else None.
    """

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ImageUploadError(CrawlStoreError):
    """Raised when the blob store rejects an image upload."""

    def __init__(self, message: str, bucket: str, key: str) -> None:
        super().__init__(message)
        self.bucket = bucket
        self.key = key


class RecordWriteError(CrawlStoreError):
    """Raised when a single-item table write fails."""

    def __init__(self, message: str, table_name: str) -> None:
        super().__init__(message)
        self.table_name = table_name


class BatchWriteError(CrawlStoreError):
    """Raised when a batch write call fails part way through the input.

    Attributes:
        table_name: Target table.
        chunk_index: Zero-based index of the failed chunk.
        items_written: Items submitted by earlier, successful calls.
    """

    def __init__(
        self,
        message: str,
        table_name: str,
        chunk_index: int,
        items_written: int,
    ) -> None:
        super().__init__(message)
        self.table_name = table_name
        self.chunk_index = chunk_index
        self.items_written = items_written
