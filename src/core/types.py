"""Shared typed models.

This module defines immutable records produced by the crawler and the
result types returned by the relay and table layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

WireValue = dict[str, Any]
WireItem = dict[str, WireValue]


class PetType(str, Enum):
    """Pet classification accepted by the listing table."""

    DOG = "Dog"
    CAT = "Cat"


class Sex(str, Enum):
    """Pet sex as published on the listing."""

    MALE = "Male"
    FEMALE = "Female"


@dataclass(frozen=True)
class PetDetail:
    """Crawled pet listing.

    Attributes:
        company_id: Operating company identifier.
        store_id: Store identifier within the company.
        pet_id: Listing identifier within the store.
        pet_type: Dog or cat.
        type: Breed label.
        price_ex_tax: Price excluding tax.
        price_inc_tax: Price including tax.
        crawled_url: Page the listing was scraped from.
        created_at: Caller-supplied creation timestamp.
        updated_at: Caller-supplied update timestamp.
        father: Optional sire name.
        mother: Optional dam name.
        color: Optional coat color.
        origin: Optional place of birth.
        sex: Optional sex.
        birthdate: Optional birthdate as published.
        images: Image object keys, possibly empty.
    """

    company_id: str
    store_id: str
    pet_id: str
    pet_type: PetType
    type: str
    price_ex_tax: float
    price_inc_tax: float
    crawled_url: str
    created_at: datetime
    updated_at: datetime
    father: str | None = None
    mother: str | None = None
    color: str | None = None
    origin: str | None = None
    sex: Sex | None = None
    birthdate: str | None = None
    images: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Store:
    """Crawled store listing.

    Attributes:
        id: Table partition identifier.
        company_id: Operating company identifier.
        store_id: Store identifier within the company.
        store_name: Display name.
        crawled_url: Page the store was scraped from.
        created_at: Caller-supplied creation timestamp.
        updated_at: Caller-supplied update timestamp.
        address: Optional postal address.
        coordinates: Optional "lat,lng" string.
        details: Optional free-text details.
        images: Image object keys, possibly empty.
    """

    id: str
    company_id: str
    store_id: str
    store_name: str
    crawled_url: str
    created_at: datetime
    updated_at: datetime
    address: str | None = None
    coordinates: str | None = None
    details: str | None = None
    images: tuple[str, ...] = field(default_factory=tuple)


DomainRecord = Union[PetDetail, Store]


@dataclass(frozen=True)
class BatchWriteResult:
    """Outcome of a completed batch write.

    Attributes:
        table_name: Target table.
        calls_issued: Number of batch write calls made.
        items_submitted: Number of put requests sent.
        unprocessed_items: Items the store reported as not processed.
    """

    table_name: str
    calls_issued: int
    items_submitted: int
    unprocessed_items: tuple[WireItem, ...] = ()
