"""Chunked DynamoDB batch writes.

This module splits records into chunks of at most 25 items and sends
one ``batch_write_item`` call per chunk, strictly in order. The first
failing call stops the run; chunks already written stay written.

Items the store reports in ``UnprocessedItems`` are not retried here.
They are logged and returned on the result so callers can resubmit.
"""

from __future__ import annotations

from typing import Any, Iterator, Sequence, TypeVar

from core.constants import MAX_BATCH_WRITE_ITEMS
from core.deadline import Deadline
from core.errors import BatchWriteError
from core.logging_config import get_logger
from core.types import BatchWriteResult, DomainRecord, WireItem
from store.record_codec import encode_record

_LOGGER = get_logger(__name__)

T = TypeVar("T")


def chunk_records(
    records: Sequence[T],
    chunk_size: int = MAX_BATCH_WRITE_ITEMS,
) -> Iterator[Sequence[T]]:
    """Yield consecutive, order-preserving chunks.

    Args:
        records: Input sequence.
        chunk_size: Maximum chunk length.

    Returns:
        Iterator over chunks; the last one may be shorter.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    for start in range(0, len(records), chunk_size):
        yield records[start : start + chunk_size]


def batch_write_items(
    client: Any,
    table_name: str,
    records: Sequence[DomainRecord],
    deadline: Deadline | None = None,
) -> BatchWriteResult:
    """Write records to a table in chunks of at most 25.

    Args:
        client: Boto3 DynamoDB low-level client.
        table_name: Target table.
        records: Records in write order.
        deadline: Optional caller deadline, checked before each call.

    Returns:
        Summary of issued calls and any unprocessed items.

    Raises:
        BatchWriteError: On the first failing call.
        CrawlStoreCancelledError: If the deadline expires between calls.
    """
    calls_issued = 0
    items_submitted = 0
    unprocessed: list[WireItem] = []
    for chunk_index, chunk in enumerate(chunk_records(records)):
        if deadline is not None:
            deadline.check(
                f"batch write chunk {chunk_index} to table {table_name} "
                f"({items_submitted} items already written)"
            )
        write_requests = [{"PutRequest": {"Item": encode_record(record)}} for record in chunk]
        try:
            response = client.batch_write_item(RequestItems={table_name: write_requests})
        except Exception as error:
            raise BatchWriteError(
                f"Failed to batch write chunk {chunk_index} to table {table_name}: {error}. "
                f"{items_submitted} items from earlier chunks were already written; "
                "resubmit the input to retry.",
                table_name=table_name,
                chunk_index=chunk_index,
                items_written=items_submitted,
            ) from error
        calls_issued += 1
        items_submitted += len(chunk)
        chunk_unprocessed = _unprocessed_items(response, table_name)
        _LOGGER.info(
            "batch_chunk_written",
            table=table_name,
            chunk_index=chunk_index,
            item_count=len(chunk),
        )
        if chunk_unprocessed:
            _LOGGER.warning(
                "batch_unprocessed_items",
                table=table_name,
                chunk_index=chunk_index,
                unprocessed_count=len(chunk_unprocessed),
            )
            unprocessed.extend(chunk_unprocessed)
    return BatchWriteResult(
        table_name=table_name,
        calls_issued=calls_issued,
        items_submitted=items_submitted,
        unprocessed_items=tuple(unprocessed),
    )


def _unprocessed_items(response: Any, table_name: str) -> list[WireItem]:
    """Extract put items the store declined to process."""
    pending = (response or {}).get("UnprocessedItems", {}).get(table_name, [])
    return [
        request["PutRequest"]["Item"]
        for request in pending
        if "PutRequest" in request
    ]
