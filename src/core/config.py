"""Runtime configuration model for crawlstore.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from core.errors import CrawlStoreConfigError


@dataclass(frozen=True)
class CrawlStoreConfig:
    """Validated runtime configuration.

    Attributes:
        image_bucket: S3 bucket receiving relayed images.
        pet_table: DynamoDB table for pet listings.
        store_table: DynamoDB table for store listings.
        aws_region: Optional AWS region for boto3 sessions.
        aws_profile: Optional AWS profile for boto3 sessions.
        endpoint_url: Optional endpoint override, e.g. for LocalStack.
        http_timeout: Timeout in seconds for image downloads.
    """

    image_bucket: str | None = None
    pet_table: str | None = None
    store_table: str | None = None
    aws_region: str | None = None
    aws_profile: str | None = None
    endpoint_url: str | None = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "CrawlStoreConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CrawlStoreConfigError: If environment values are invalid.
        """
        timeout_value = os.getenv("CRAWLSTORE_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
        return cls(
            image_bucket=os.getenv("CRAWLSTORE_IMAGE_BUCKET") or None,
            pet_table=os.getenv("CRAWLSTORE_PET_TABLE") or None,
            store_table=os.getenv("CRAWLSTORE_STORE_TABLE") or None,
            aws_region=os.getenv("CRAWLSTORE_AWS_REGION") or None,
            aws_profile=os.getenv("CRAWLSTORE_AWS_PROFILE") or None,
            endpoint_url=os.getenv("CRAWLSTORE_ENDPOINT_URL") or None,
            http_timeout=_parse_http_timeout(timeout_value),
        )


def require_setting(value: str | None, env_name: str) -> str:
    """Return a required setting or fail eagerly.

    Args:
        value: Configured value.
        env_name: Environment variable that supplies it.

    Returns:
        The non-empty value.

    Raises:
        CrawlStoreConfigError: If the value is missing.
    """
    if not value:
        raise CrawlStoreConfigError(
            f"Missing required setting {env_name}: value is not set. "
            f"Set {env_name} before constructing this component."
        )
    return value


def _parse_http_timeout(raw_value: str) -> float:
    """Parse the HTTP timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        CrawlStoreConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise CrawlStoreConfigError(
            "Invalid CRAWLSTORE_HTTP_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set CRAWLSTORE_HTTP_TIMEOUT to a positive number."
        ) from error
    if timeout <= 0:
        raise CrawlStoreConfigError(
            f"Invalid CRAWLSTORE_HTTP_TIMEOUT value: {raw_value} is not positive. "
            "Set CRAWLSTORE_HTTP_TIMEOUT to a positive number."
        )
    return timeout
