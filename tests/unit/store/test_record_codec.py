"""Unit tests for record attribute-value encoding."""

from __future__ import annotations

import pytest

from core.types import PetType, Sex
from store.record_codec import (
    decode_pet_detail,
    decode_store,
    encode_pet_detail,
    encode_record,
    encode_store,
)
from tests.sample_records import CREATED_AT, sample_pet, sample_store

PET_REQUIRED_KEYS = {
    "companyID",
    "storeID",
    "petID",
    "petType",
    "type",
    "priceExTax",
    "priceIncTax",
    "crawledUrl",
    "createdAt",
    "updatedAt",
}


def test_encode_pet_detail_formats_prices_with_two_decimals() -> None:
    """Prices should be string-encoded numbers with two fractional digits."""
    item = encode_pet_detail(sample_pet(price_ex_tax=12.5, price_inc_tax=275000))

    assert item["priceExTax"] == {"N": "12.50"}
    assert item["priceIncTax"] == {"N": "275000.00"}


def test_encode_pet_detail_without_optionals_has_only_required_keys() -> None:
    """A record with no optional fields or images should keep required keys only."""
    item = encode_pet_detail(sample_pet())

    assert set(item) == PET_REQUIRED_KEYS


def test_encode_pet_detail_formats_timestamps_as_rfc3339() -> None:
    """Timestamps should be encoded as RFC 3339 strings."""
    item = encode_pet_detail(sample_pet())

    assert item["createdAt"] == {"S": "2024-05-01T09:30:00Z"}
    assert item["updatedAt"] == {"S": "2024-05-02T18:00:05Z"}


def test_encode_pet_detail_includes_present_optionals() -> None:
    """Present optional fields should be written as strings."""
    pet = sample_pet(father="Kuro", sex=Sex.FEMALE, birthdate="2024-03-01")

    item = encode_pet_detail(pet)

    assert item["father"] == {"S": "Kuro"}
    assert item["sex"] == {"S": "Female"}
    assert item["birthdate"] == {"S": "2024-03-01"}
    assert "mother" not in item and "color" not in item and "origin" not in item


def test_encode_pet_detail_keeps_empty_string_optional() -> None:
    """Presence is decided by None, so an empty string is still written."""
    item = encode_pet_detail(sample_pet(color=""))

    assert item["color"] == {"S": ""}


def test_encode_store_omits_empty_images() -> None:
    """An empty image list should not produce an images key."""
    item = encode_store(sample_store(images=()))

    assert "images" not in item
    assert item["storeName"] == {"S": "Foo"}


def test_encode_store_writes_images_as_string_set() -> None:
    """Image references should be encoded as a string set."""
    item = encode_store(sample_store(images=("a.jpg", "b.jpg")))

    assert set(item["images"]["SS"]) == {"a.jpg", "b.jpg"}


def test_encode_store_deduplicates_images() -> None:
    """String sets cannot hold duplicates, so repeated images collapse."""
    item = encode_store(sample_store(images=("a.jpg", "a.jpg", "b.jpg")))

    assert item["images"] == {"SS": ["a.jpg", "b.jpg"]}


def test_encode_store_uses_store_timestamp_keys() -> None:
    """Store rows keep the createDate and updateDate attribute names."""
    item = encode_store(sample_store())

    assert item["createDate"] == {"S": "2024-05-01T09:30:00Z"}
    assert "createdAt" not in item


def test_decode_pet_detail_recovers_encoded_record() -> None:
    """Decoding should recover required and present optional fields."""
    pet = sample_pet(
        pet_type=PetType.CAT,
        mother="Tama",
        origin="Chiba",
        sex=Sex.MALE,
        images=("P1-1.jpg",),
    )

    assert decode_pet_detail(encode_pet_detail(pet)) == pet


def test_decode_store_recovers_encoded_record() -> None:
    """Decoding should leave absent optionals as None."""
    store = sample_store(address="Tokyo", images=("a.jpg", "b.jpg"))

    decoded = decode_store(encode_store(store))

    assert decoded == store
    assert decoded.details is None


def test_encode_record_rejects_unknown_types() -> None:
    """Dispatch should fail loudly for unsupported record types."""
    with pytest.raises(TypeError):
        encode_record({"companyID": "C1"})  # type: ignore[arg-type]


def test_encode_pet_detail_truncates_sub_second_timestamps() -> None:
    """Wire timestamps keep whole seconds, so decoding drops microseconds."""
    pet = sample_pet(created_at=CREATED_AT.replace(microsecond=987654))

    decoded = decode_pet_detail(encode_pet_detail(pet))

    assert encode_pet_detail(pet)["createdAt"] == {"S": "2024-05-01T09:30:00Z"}
    assert decoded.created_at == CREATED_AT
    assert decoded != pet
