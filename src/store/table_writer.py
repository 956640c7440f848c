"""DynamoDB table writer component.

This module owns a DynamoDB client handle bound to one table and
exposes single-item puts and chunked batch saves.
"""

from __future__ import annotations

from typing import Any, Sequence

from core.deadline import Deadline
from core.errors import CrawlStoreConfigError, RecordWriteError
from core.logging_config import get_logger
from core.types import BatchWriteResult, DomainRecord
from store.batch_writer import batch_write_items
from store.record_codec import encode_record

_LOGGER = get_logger(__name__)


class TableWriter:
    """Write crawler records into a single DynamoDB table."""

    def __init__(self, client: Any, table_name: str | None) -> None:
        """Create a table writer.

        Args:
            client: Boto3 DynamoDB low-level client.
            table_name: Target table.

        Raises:
            CrawlStoreConfigError: If the table name is missing.
        """
        if not table_name:
            raise CrawlStoreConfigError(
                "Missing DynamoDB table name for TableWriter. "
                "Set CRAWLSTORE_PET_TABLE or CRAWLSTORE_STORE_TABLE."
            )
        self._client = client
        self._table_name = table_name

    @property
    def table_name(self) -> str:
        return self._table_name

    def put_record(self, record: DomainRecord, deadline: Deadline | None = None) -> None:
        """Write one record with ``put_item``.

        Args:
            record: Pet or store record.
            deadline: Optional caller deadline.

        Raises:
            RecordWriteError: If the store rejects the write.
            CrawlStoreCancelledError: If the deadline has expired.
        """
        if deadline is not None:
            deadline.check(f"put_item to table {self._table_name}")
        item = encode_record(record)
        try:
            self._client.put_item(TableName=self._table_name, Item=item)
        except Exception as error:
            raise RecordWriteError(
                f"Failed to put item into table {self._table_name}: {error}. "
                "Check AWS credentials and table permissions, then retry.",
                table_name=self._table_name,
            ) from error
        _LOGGER.info("record_saved", table=self._table_name, record_type=type(record).__name__)

    def save_records(
        self,
        records: Sequence[DomainRecord],
        deadline: Deadline | None = None,
    ) -> BatchWriteResult:
        """Write records in chunks of at most 25.

        Args:
            records: Records in write order.
            deadline: Optional caller deadline.

        Returns:
            Batch write summary.
        """
        return batch_write_items(self._client, self._table_name, records, deadline)
