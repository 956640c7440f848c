"""Python SDK for crawl result persistence.

This module exposes high-level APIs for relaying images and saving
pet and store listings, backed by explicit relay and table components.
"""

from __future__ import annotations

from typing import Any, Sequence

import requests

from core.aws_clients import create_dynamodb_client
from core.config import CrawlStoreConfig, require_setting
from core.deadline import Deadline
from core.types import BatchWriteResult, PetDetail, Store
from relay.image_relay import ImageRelay
from store.table_writer import TableWriter


class CrawlStoreClient:
    """Primary SDK entry point for crawl persistence workflows.

    Components are built on first use so a process that only relays
    images needs no table configuration, and vice versa. Each component
    validates its own settings when it is built.
    """

    def __init__(
        self,
        config: CrawlStoreConfig | None = None,
        s3_client: Any | None = None,
        dynamodb_client: Any | None = None,
        http_session: requests.Session | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            s3_client: Optional pre-built S3 client.
            dynamodb_client: Optional pre-built DynamoDB client.
            http_session: Optional pre-built HTTP session.
        """
        self._config = config or CrawlStoreConfig.from_env()
        self._s3_client = s3_client
        self._dynamodb_client = dynamodb_client
        self._http_session = http_session
        self._image_relay: ImageRelay | None = None
        self._pet_writer: TableWriter | None = None
        self._store_writer: TableWriter | None = None

    def image_relay(self) -> ImageRelay:
        """Return the image relay, building it on first use."""
        if self._image_relay is None:
            self._image_relay = ImageRelay(self._config, self._s3_client, self._http_session)
        return self._image_relay

    def pet_writer(self) -> TableWriter:
        """Return the pet table writer, building it on first use."""
        if self._pet_writer is None:
            table_name = require_setting(self._config.pet_table, "CRAWLSTORE_PET_TABLE")
            self._pet_writer = TableWriter(self._dynamodb(), table_name)
        return self._pet_writer

    def store_writer(self) -> TableWriter:
        """Return the store table writer, building it on first use."""
        if self._store_writer is None:
            table_name = require_setting(self._config.store_table, "CRAWLSTORE_STORE_TABLE")
            self._store_writer = TableWriter(self._dynamodb(), table_name)
        return self._store_writer

    def relay_image(self, image_url: str, file_name: str, deadline: Deadline | None = None) -> str:
        """Download an image and store it under ``images/<file_name>``.

        Args:
            image_url: Source image URL.
            file_name: Target file name.
            deadline: Optional caller deadline.

        Returns:
            Uploaded object key.
        """
        return self.image_relay().relay(image_url, file_name, deadline)

    def save_pet_details(
        self,
        pets: Sequence[PetDetail],
        deadline: Deadline | None = None,
    ) -> BatchWriteResult:
        """Batch save pet listings into the pet table."""
        return self.pet_writer().save_records(pets, deadline)

    def save_stores(
        self,
        stores: Sequence[Store],
        deadline: Deadline | None = None,
    ) -> BatchWriteResult:
        """Batch save store listings into the store table."""
        return self.store_writer().save_records(stores, deadline)

    def save_store(self, store: Store, deadline: Deadline | None = None) -> None:
        """Save one store listing with a single put."""
        self.store_writer().put_record(store, deadline)

    def _dynamodb(self) -> Any:
        if self._dynamodb_client is None:
            self._dynamodb_client = create_dynamodb_client(self._config)
        return self._dynamodb_client
