"""Download-then-upload relay for crawled images.

This module fetches an image over HTTP, buffers the full body in a
spooled temporary file, and writes it to S3 under ``images/<name>``.

The body is never streamed straight into ``put_object``: S3 rejects
chunked bodies without a known length with a NotImplemented error, so
the relay buffers first and sends an explicit ``ContentLength``.
"""

from __future__ import annotations

import tempfile
from typing import IO, Any

import requests

from core.aws_clients import create_s3_client
from core.config import CrawlStoreConfig, require_setting
from core.constants import (
    DEFAULT_CONTENT_TYPE,
    DOWNLOAD_CHUNK_SIZE,
    IMAGE_KEY_PREFIX,
    SPOOL_MAX_BYTES,
)
from core.deadline import Deadline, bounded_timeout
from core.errors import ImageDownloadError, ImageUploadError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

HTTP_HEADERS = {
    "User-Agent": "crawlstore-image-relay/0.1",
    "Accept": "image/*,*/*;q=0.8",
}


def create_http_session() -> requests.Session:
    """Create a requests Session with connection pooling and relay headers."""
    session = requests.Session()
    session.headers.update(HTTP_HEADERS)
    return session


def build_image_key(file_name: str) -> str:
    """Return the object key used for an image file name."""
    return f"{IMAGE_KEY_PREFIX}/{file_name}"


class ImageRelay:
    """Relay images from crawler URLs into the configured bucket.

    The relay owns its S3 client and HTTP session. Both are safe to reuse
    across calls; every call gets its own buffer.
    """

    def __init__(
        self,
        config: CrawlStoreConfig,
        s3_client: Any | None = None,
        http_session: requests.Session | None = None,
    ) -> None:
        """Create an image relay.

        Args:
            config: Runtime configuration.
            s3_client: Optional pre-built S3 client.
            http_session: Optional pre-built HTTP session.

        Raises:
            CrawlStoreConfigError: If no image bucket is configured.
        """
        self._bucket = require_setting(config.image_bucket, "CRAWLSTORE_IMAGE_BUCKET")
        self._timeout = config.http_timeout
        self._s3_client = s3_client if s3_client is not None else create_s3_client(config)
        self._session = http_session if http_session is not None else create_http_session()

    @property
    def bucket(self) -> str:
        return self._bucket

    def relay(self, image_url: str, file_name: str, deadline: Deadline | None = None) -> str:
        """Download an image and upload it to S3.

        Args:
            image_url: Source URL of the image.
            file_name: Target file name under the images prefix.
            deadline: Optional caller deadline.

        Returns:
            Object key of the uploaded image.

        Raises:
            ImageDownloadError: If the fetch fails or returns non-2xx.
            ImageUploadError: If S3 rejects the upload.
            CrawlStoreCancelledError: If the deadline expires.
        """
        object_key = build_image_key(file_name)
        with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_BYTES) as buffer:
            content_type = self._download(image_url, buffer, deadline)
            size_bytes = buffer.tell()
            buffer.seek(0)
            if deadline is not None:
                deadline.check(f"uploading s3://{self._bucket}/{object_key}")
            self._upload(object_key, buffer, size_bytes, content_type)
        _LOGGER.info(
            "image_uploaded",
            bucket=self._bucket,
            key=object_key,
            size_bytes=size_bytes,
        )
        return object_key

    def _download(
        self,
        image_url: str,
        buffer: IO[bytes],
        deadline: Deadline | None,
    ) -> str | None:
        """Copy the response body into the buffer and return its content type."""
        timeout = bounded_timeout(self._timeout, deadline, f"downloading {image_url}")
        try:
            response = self._session.get(image_url, stream=True, timeout=timeout)
        except requests.RequestException as error:
            raise ImageDownloadError(
                f"Failed to download image {image_url}: {error}. "
                "Check the URL and network connectivity, then retry.",
                url=image_url,
            ) from error
        try:
            if not 200 <= response.status_code < 300:
                raise ImageDownloadError(
                    f"Failed to download image {image_url}: "
                    f"HTTP status {response.status_code}. "
                    "Verify the image still exists at the source.",
                    url=image_url,
                    status_code=response.status_code,
                )
            self._copy_body(image_url, response, buffer, deadline)
            return response.headers.get("Content-Type")
        finally:
            response.close()

    def _copy_body(
        self,
        image_url: str,
        response: requests.Response,
        buffer: IO[bytes],
        deadline: Deadline | None,
    ) -> None:
        try:
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                if deadline is not None:
                    deadline.check(f"finishing download of {image_url}")
                if chunk:
                    buffer.write(chunk)
        except requests.RequestException as error:
            raise ImageDownloadError(
                f"Failed to read image body from {image_url}: {error}. "
                "The connection dropped mid-transfer; retry the relay.",
                url=image_url,
            ) from error
        except OSError as error:
            raise ImageDownloadError(
                f"Failed to buffer image body from {image_url}: {error}. "
                "Check free space in the temp directory.",
                url=image_url,
            ) from error

    def _upload(
        self,
        object_key: str,
        body: IO[bytes],
        size_bytes: int,
        content_type: str | None,
    ) -> None:
        put_kwargs: dict[str, Any] = {
            "Bucket": self._bucket,
            "Key": object_key,
            "Body": body,
            "ContentLength": size_bytes,
            "ContentType": content_type or DEFAULT_CONTENT_TYPE,
        }
        try:
            self._s3_client.put_object(**put_kwargs)
        except Exception as error:
            raise ImageUploadError(
                f"Failed to upload image to s3://{self._bucket}/{object_key}: {error}. "
                "Check AWS credentials and bucket permissions, then retry.",
                bucket=self._bucket,
                key=object_key,
            ) from error
