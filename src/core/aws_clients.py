"""AWS client construction helpers.

This module encapsulates boto3 session and client creation so that
components receive ready handles and tests can substitute fakes.
"""

from __future__ import annotations

from typing import Any

from core.config import CrawlStoreConfig
from core.errors import CrawlStoreConfigError, CrawlStoreDependencyError


def create_s3_client(config: CrawlStoreConfig) -> Any:
    """Create boto3 S3 client for image uploads.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.

    Raises:
        CrawlStoreDependencyError: If boto3 is missing.
        CrawlStoreConfigError: If botocore cannot resolve region or profile.
    """
    return _create_client("s3", config)


def create_dynamodb_client(config: CrawlStoreConfig) -> Any:
    """Create boto3 DynamoDB client for record writes.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 DynamoDB low-level client.

    Raises:
        CrawlStoreDependencyError: If boto3 is missing.
        CrawlStoreConfigError: If botocore cannot resolve region or profile.
    """
    return _create_client("dynamodb", config)


def _create_client(service_name: str, config: CrawlStoreConfig) -> Any:
    try:
        import boto3
        from botocore.config import Config
        from botocore.exceptions import BotoCoreError
    except ImportError as error:
        raise CrawlStoreDependencyError(
            f"{service_name} access requires boto3, but it is not installed. "
            "Install boto3 to write to AWS storage."
        ) from error
    client_config = Config(
        connect_timeout=config.http_timeout,
        read_timeout=config.http_timeout,
    )
    client_kwargs: dict[str, Any] = {"config": client_config}
    if config.endpoint_url:
        client_kwargs["endpoint_url"] = config.endpoint_url
    try:
        session = boto3.session.Session(**build_session_kwargs(config))
        return session.client(service_name, **client_kwargs)
    except BotoCoreError as error:
        raise CrawlStoreConfigError(
            f"Failed to create {service_name} client: {error}. "
            "Set CRAWLSTORE_AWS_REGION and CRAWLSTORE_AWS_PROFILE to valid values."
        ) from error


def build_session_kwargs(config: CrawlStoreConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Runtime config.

    Returns:
        Session keyword arguments.
    """
    kwargs: dict[str, str] = {}
    if config.aws_profile:
        kwargs["profile_name"] = config.aws_profile
    if config.aws_region:
        kwargs["region_name"] = config.aws_region
    return kwargs
