"""Public SDK surface for crawlstore.

This module provides a stable import path for crawler handlers.
It re-exports the client, components, and typed record models.
"""

from __future__ import annotations

from core.config import CrawlStoreConfig
from core.deadline import Deadline
from core.errors import (
    BatchWriteError,
    CrawlStoreCancelledError,
    CrawlStoreConfigError,
    CrawlStoreError,
    ImageDownloadError,
    ImageUploadError,
    RecordWriteError,
)
from core.types import BatchWriteResult, PetDetail, PetType, Sex, Store
from relay.image_relay import ImageRelay
from store.batch_writer import batch_write_items
from store.crawlstore_sdk import CrawlStoreClient
from store.record_codec import encode_pet_detail, encode_record, encode_store
from store.table_writer import TableWriter

__all__ = [
    "BatchWriteError",
    "BatchWriteResult",
    "CrawlStoreCancelledError",
    "CrawlStoreClient",
    "CrawlStoreConfig",
    "CrawlStoreConfigError",
    "CrawlStoreError",
    "Deadline",
    "ImageDownloadError",
    "ImageRelay",
    "ImageUploadError",
    "PetDetail",
    "PetType",
    "RecordWriteError",
    "Sex",
    "Store",
    "TableWriter",
    "batch_write_items",
    "encode_pet_detail",
    "encode_record",
    "encode_store",
]
