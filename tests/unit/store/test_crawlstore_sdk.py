"""Unit tests for the crawlstore SDK client."""

from __future__ import annotations

import pytest

from core.config import CrawlStoreConfig
from core.errors import CrawlStoreConfigError
from store import crawlstore_sdk
from store.crawlstore_sdk import CrawlStoreClient
from tests.fakes import FakeDynamoClient, FakeResponse, FakeS3Client, FakeSession
from tests.sample_records import sample_pet, sample_store


def _client(config: CrawlStoreConfig, dynamodb_client=None, s3_client=None) -> CrawlStoreClient:
    return CrawlStoreClient(
        config,
        s3_client=s3_client or FakeS3Client(),
        dynamodb_client=dynamodb_client or FakeDynamoClient(),
        http_session=FakeSession(FakeResponse(chunks=(b"img",))),
    )


def test_relay_image_returns_object_key() -> None:
    """SDK relay should return the uploaded key."""
    s3_client = FakeS3Client()
    client = _client(CrawlStoreConfig(image_bucket="pet-images"), s3_client=s3_client)

    object_key = client.relay_image("https://example.com/a.jpg", "a.jpg")

    assert object_key == "images/a.jpg"
    assert s3_client.objects[("pet-images", "images/a.jpg")] == b"img"


def test_save_pet_details_targets_pet_table() -> None:
    """Pet saves should go to the pet table."""
    dynamodb_client = FakeDynamoClient()
    client = _client(CrawlStoreConfig(pet_table="PetDetails"), dynamodb_client=dynamodb_client)

    client.save_pet_details([sample_pet()])

    assert list(dynamodb_client.batch_calls[0]) == ["PetDetails"]


def test_save_store_uses_single_put() -> None:
    """Single store saves should use put_item on the store table."""
    dynamodb_client = FakeDynamoClient()
    client = _client(CrawlStoreConfig(store_table="Stores"), dynamodb_client=dynamodb_client)

    client.save_store(sample_store())

    assert dynamodb_client.put_calls[0]["TableName"] == "Stores"


def test_save_stores_without_table_raises_config_error() -> None:
    """Store writes should fail eagerly when no table is configured."""
    client = _client(CrawlStoreConfig(pet_table="PetDetails"))

    with pytest.raises(CrawlStoreConfigError):
        client.save_stores([sample_store()])


def test_pet_writer_checks_table_before_building_aws_client(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A missing pet table should fail before any AWS client is created."""
    created: list[CrawlStoreConfig] = []
    monkeypatch.setattr(crawlstore_sdk, "create_dynamodb_client", created.append)
    client = CrawlStoreClient(CrawlStoreConfig())

    with pytest.raises(CrawlStoreConfigError, match="CRAWLSTORE_PET_TABLE"):
        client.pet_writer()

    assert created == []


def test_store_writer_checks_table_before_building_aws_client(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A missing store table should fail before any AWS client is created."""
    created: list[CrawlStoreConfig] = []
    monkeypatch.setattr(crawlstore_sdk, "create_dynamodb_client", created.append)
    client = CrawlStoreClient(CrawlStoreConfig())

    with pytest.raises(CrawlStoreConfigError, match="CRAWLSTORE_STORE_TABLE"):
        client.store_writer()

    assert created == []
