"""Record to DynamoDB attribute-value conversion.

This module converts typed crawler records into the low-level wire
format accepted by ``put_item`` and ``batch_write_item``. Optional
fields are emitted only when present and empty image lists are
omitted, because DynamoDB rejects empty string sets.
"""

from __future__ import annotations

from typing import Any

from core.constants import PRICE_DECIMAL_PLACES
from core.timestamps import format_rfc3339, parse_rfc3339
from core.types import DomainRecord, PetDetail, PetType, Sex, Store, WireItem, WireValue


def encode_record(record: DomainRecord) -> WireItem:
    """Encode any supported record type.

    Args:
        record: Pet or store record.

    Returns:
        Attribute-value mapping.

    Raises:
        TypeError: If the record type is not supported.
    """
    if isinstance(record, PetDetail):
        return encode_pet_detail(record)
    if isinstance(record, Store):
        return encode_store(record)
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def encode_pet_detail(pet: PetDetail) -> WireItem:
    """Encode a pet listing into an attribute-value mapping.

    Args:
        pet: Pet listing.

    Returns:
        Attribute-value mapping with only present fields.
    """
    item: WireItem = {
        "companyID": _string(pet.company_id),
        "storeID": _string(pet.store_id),
        "petID": _string(pet.pet_id),
        "petType": _string(pet.pet_type.value),
        "type": _string(pet.type),
        "priceExTax": _price(pet.price_ex_tax),
        "priceIncTax": _price(pet.price_inc_tax),
        "crawledUrl": _string(pet.crawled_url),
        "createdAt": _string(format_rfc3339(pet.created_at)),
        "updatedAt": _string(format_rfc3339(pet.updated_at)),
    }
    _put_optional(item, "father", pet.father)
    _put_optional(item, "mother", pet.mother)
    _put_optional(item, "color", pet.color)
    _put_optional(item, "origin", pet.origin)
    _put_optional(item, "sex", pet.sex.value if pet.sex is not None else None)
    _put_optional(item, "birthdate", pet.birthdate)
    _put_images(item, pet.images)
    return item


def encode_store(store: Store) -> WireItem:
    """Encode a store listing into an attribute-value mapping.

    Args:
        store: Store listing.

    Returns:
        Attribute-value mapping with only present fields.
    """
    item: WireItem = {
        "id": _string(store.id),
        "companyID": _string(store.company_id),
        "storeID": _string(store.store_id),
        "storeName": _string(store.store_name),
        "crawledUrl": _string(store.crawled_url),
        "createDate": _string(format_rfc3339(store.created_at)),
        "updateDate": _string(format_rfc3339(store.updated_at)),
    }
    _put_optional(item, "address", store.address)
    _put_optional(item, "coordinates", store.coordinates)
    _put_optional(item, "details", store.details)
    _put_images(item, store.images)
    return item


def decode_pet_detail(item: WireItem) -> PetDetail:
    """Rebuild a pet listing from its attribute-value mapping."""
    sex = _optional_string(item, "sex")
    return PetDetail(
        company_id=item["companyID"]["S"],
        store_id=item["storeID"]["S"],
        pet_id=item["petID"]["S"],
        pet_type=PetType(item["petType"]["S"]),
        type=item["type"]["S"],
        price_ex_tax=float(item["priceExTax"]["N"]),
        price_inc_tax=float(item["priceIncTax"]["N"]),
        crawled_url=item["crawledUrl"]["S"],
        created_at=parse_rfc3339(item["createdAt"]["S"]),
        updated_at=parse_rfc3339(item["updatedAt"]["S"]),
        father=_optional_string(item, "father"),
        mother=_optional_string(item, "mother"),
        color=_optional_string(item, "color"),
        origin=_optional_string(item, "origin"),
        sex=Sex(sex) if sex is not None else None,
        birthdate=_optional_string(item, "birthdate"),
        images=_images(item),
    )


def decode_store(item: WireItem) -> Store:
    """Rebuild a store listing from its attribute-value mapping."""
    return Store(
        id=item["id"]["S"],
        company_id=item["companyID"]["S"],
        store_id=item["storeID"]["S"],
        store_name=item["storeName"]["S"],
        crawled_url=item["crawledUrl"]["S"],
        created_at=parse_rfc3339(item["createDate"]["S"]),
        updated_at=parse_rfc3339(item["updateDate"]["S"]),
        address=_optional_string(item, "address"),
        coordinates=_optional_string(item, "coordinates"),
        details=_optional_string(item, "details"),
        images=_images(item),
    )


def _string(value: str) -> WireValue:
    return {"S": value}


def _price(value: float) -> WireValue:
    return {"N": f"{value:.{PRICE_DECIMAL_PLACES}f}"}


def _put_optional(item: WireItem, key: str, value: str | None) -> None:
    if value is not None:
        item[key] = _string(value)


def _put_images(item: WireItem, images: tuple[str, ...]) -> None:
    if images:
        item["images"] = {"SS": list(dict.fromkeys(images))}


def _optional_string(item: WireItem, key: str) -> str | None:
    value: Any = item.get(key)
    return value["S"] if value is not None else None


def _images(item: WireItem) -> tuple[str, ...]:
    value = item.get("images")
    return tuple(value["SS"]) if value is not None else ()
