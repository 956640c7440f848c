"""Builders for pet and store records used across tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from core.types import PetDetail, PetType, Store

CREATED_AT = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
UPDATED_AT = datetime(2024, 5, 2, 18, 0, 5, tzinfo=timezone.utc)


def sample_pet(pet_id: str = "P1", **overrides: Any) -> PetDetail:
    pet = PetDetail(
        company_id="C1",
        store_id="S1",
        pet_id=pet_id,
        pet_type=PetType.DOG,
        type="Shiba Inu",
        price_ex_tax=12.5,
        price_inc_tax=13.75,
        crawled_url=f"https://example.com/pets/{pet_id}",
        created_at=CREATED_AT,
        updated_at=UPDATED_AT,
    )
    return replace(pet, **overrides)


def sample_store(store_id: str = "S1", **overrides: Any) -> Store:
    store = Store(
        id=f"C1#{store_id}",
        company_id="C1",
        store_id=store_id,
        store_name="Foo",
        crawled_url=f"https://example.com/stores/{store_id}",
        created_at=CREATED_AT,
        updated_at=UPDATED_AT,
    )
    return replace(store, **overrides)
