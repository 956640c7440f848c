"""Crawler JSONL record readers.

This module loads pet and store listings emitted by the crawler as
JSON lines with camelCase keys and normalizes them into typed records.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

from core.errors import CrawlStoreIngestError
from core.timestamps import parse_rfc3339
from core.types import PetDetail, PetType, Sex, Store

RecordT = TypeVar("RecordT")


def read_pet_details(source_path: str | Path) -> list[PetDetail]:
    """Read pet listings from a JSONL file.

    Args:
        source_path: Path to crawler JSONL output.

    Returns:
        Ordered list of pet listings.

    Raises:
        CrawlStoreIngestError: If the file or any line is invalid.
    """
    return _read_jsonl(Path(source_path), parse_pet_detail)


def read_stores(source_path: str | Path, now: datetime | None = None) -> list[Store]:
    """Read store listings from a JSONL file.

    The crawler emits stores without timestamps, so every store missing
    ``createdAt`` or ``updatedAt`` is stamped with one shared ingest time.

    Args:
        source_path: Path to crawler JSONL output.
        now: Ingest time for missing timestamps; current UTC time if omitted.

    Returns:
        Ordered list of store listings.

    Raises:
        CrawlStoreIngestError: If the file or any line is invalid.
    """
    ingested_at = now or datetime.now(timezone.utc)
    return _read_jsonl(
        Path(source_path),
        lambda payload, location: parse_store(payload, location, ingested_at),
    )


def parse_pet_detail(payload: Mapping[str, Any], location: str) -> PetDetail:
    """Build a pet listing from one crawler payload.

    Args:
        payload: Decoded JSON object.
        location: ``file:line`` context for error messages.

    Returns:
        Typed pet listing.

    Raises:
        CrawlStoreIngestError: If a field is missing or malformed.
    """
    sex = _optional_str(payload, "sex", location)
    return PetDetail(
        company_id=_required_str(payload, "companyID", location),
        store_id=_required_str(payload, "storeID", location),
        pet_id=_required_str(payload, "petID", location),
        pet_type=_enum_value(PetType, _required_str(payload, "petType", location), location),
        type=_required_str(payload, "type", location),
        price_ex_tax=_required_number(payload, "priceExTax", location),
        price_inc_tax=_required_number(payload, "priceIncTax", location),
        crawled_url=_required_str(payload, "crawledUrl", location),
        created_at=_timestamp(payload, "createdAt", location),
        updated_at=_timestamp(payload, "updatedAt", location),
        father=_optional_str(payload, "father", location),
        mother=_optional_str(payload, "mother", location),
        color=_optional_str(payload, "color", location),
        origin=_optional_str(payload, "origin", location),
        sex=_enum_value(Sex, sex, location) if sex is not None else None,
        birthdate=_optional_str(payload, "birthdate", location),
        images=_images(payload, location),
    )


def parse_store(
    payload: Mapping[str, Any],
    location: str,
    ingested_at: datetime | None = None,
) -> Store:
    """Build a store listing from one crawler payload.

    Args:
        payload: Decoded JSON object.
        location: ``file:line`` context for error messages.
        ingested_at: Fallback for absent timestamps; current UTC time if omitted.

    Returns:
        Typed store listing.

    Raises:
        CrawlStoreIngestError: If a field is missing or malformed.
    """
    fallback = ingested_at or datetime.now(timezone.utc)
    return Store(
        id=_required_str(payload, "id", location),
        company_id=_required_str(payload, "companyID", location),
        store_id=_required_str(payload, "storeID", location),
        store_name=_required_str(payload, "storeName", location),
        crawled_url=_required_str(payload, "crawledUrl", location),
        created_at=_timestamp_or_default(payload, "createdAt", location, fallback),
        updated_at=_timestamp_or_default(payload, "updatedAt", location, fallback),
        address=_optional_str(payload, "address", location),
        coordinates=_optional_str(payload, "coordinates", location),
        details=_optional_str(payload, "details", location),
        images=_images(payload, location),
    )


def _read_jsonl(
    file_path: Path,
    parse_record: Callable[[Mapping[str, Any], str], RecordT],
) -> list[RecordT]:
    if not file_path.is_file():
        raise CrawlStoreIngestError(
            f"Failed to read records at {file_path}: file does not exist. "
            "Provide the crawler's JSONL output file."
        )
    records: list[RecordT] = []
    for line_number, line in enumerate(file_path.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        location = f"{file_path}:{line_number}"
        records.append(parse_record(_parse_jsonl_line(line, location), location))
    return records


def _parse_jsonl_line(line: str, location: str) -> Mapping[str, Any]:
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as error:
        raise CrawlStoreIngestError(
            f"Failed to parse JSONL record at {location}: "
            f"{error.msg}. Fix the JSON syntax and retry."
        ) from error
    if not isinstance(payload, dict):
        raise CrawlStoreIngestError(
            f"Invalid JSONL record at {location}: expected a JSON object."
        )
    return payload


def _required_str(payload: Mapping[str, Any], key: str, location: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise CrawlStoreIngestError(
            f"Invalid record at {location}: expected non-empty string field '{key}'."
        )
    return value


def _optional_str(payload: Mapping[str, Any], key: str, location: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise CrawlStoreIngestError(
            f"Invalid record at {location}: field '{key}' must be a string or null."
        )
    return value


def _required_number(payload: Mapping[str, Any], key: str, location: str) -> float:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CrawlStoreIngestError(
            f"Invalid record at {location}: expected numeric field '{key}'."
        )
    return float(value)


def _timestamp(payload: Mapping[str, Any], key: str, location: str) -> datetime:
    raw_value = _required_str(payload, key, location)
    try:
        return parse_rfc3339(raw_value)
    except ValueError as error:
        raise CrawlStoreIngestError(
            f"Invalid record at {location}: field '{key}' is not an RFC 3339 "
            f"timestamp ('{raw_value}')."
        ) from error


def _timestamp_or_default(
    payload: Mapping[str, Any],
    key: str,
    location: str,
    default: datetime,
) -> datetime:
    if payload.get(key) is None:
        return default
    return _timestamp(payload, key, location)


def _enum_value(enum_type: Any, raw_value: str, location: str) -> Any:
    try:
        return enum_type(raw_value)
    except ValueError as error:
        allowed = ", ".join(member.value for member in enum_type)
        raise CrawlStoreIngestError(
            f"Invalid record at {location}: '{raw_value}' is not one of {allowed}."
        ) from error


def _images(payload: Mapping[str, Any], location: str) -> tuple[str, ...]:
    value = payload.get("images")
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise CrawlStoreIngestError(
            f"Invalid record at {location}: field 'images' must be a list of strings."
        )
    return tuple(value)
