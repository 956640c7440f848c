"""Test doubles for S3, DynamoDB, and HTTP collaborators."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

import requests
from botocore.exceptions import ClientError


def client_error(operation_name: str, code: str = "InternalServerError") -> ClientError:
    """Build a botocore ClientError as raised by a real client."""
    return ClientError({"Error": {"Code": code, "Message": "simulated failure"}}, operation_name)


class FakeS3Client:
    """Records put_object calls and the exact bytes uploaded."""

    def __init__(self, error: Exception | None = None) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.calls: list[dict[str, Any]] = []
        self._error = error

    def put_object(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        self.objects[(kwargs["Bucket"], kwargs["Key"])] = kwargs["Body"].read()
        return {"ETag": '"fake"'}


class FakeDynamoClient:
    """Records batch and single writes; can fail on the n-th batch call."""

    def __init__(
        self,
        fail_on_call: int | None = None,
        unprocessed_per_call: int = 0,
        put_error: Exception | None = None,
    ) -> None:
        self.batch_calls: list[dict[str, Any]] = []
        self.put_calls: list[dict[str, Any]] = []
        self._fail_on_call = fail_on_call
        self._unprocessed_per_call = unprocessed_per_call
        self._put_error = put_error

    def batch_write_item(self, RequestItems: dict[str, list[dict[str, Any]]]) -> dict[str, Any]:
        self.batch_calls.append(RequestItems)
        if self._fail_on_call == len(self.batch_calls):
            raise client_error("BatchWriteItem")
        unprocessed: dict[str, list[dict[str, Any]]] = {}
        if self._unprocessed_per_call:
            for table_name, requests_for_table in RequestItems.items():
                unprocessed[table_name] = requests_for_table[: self._unprocessed_per_call]
        return {"UnprocessedItems": unprocessed}

    def put_item(self, TableName: str, Item: dict[str, Any]) -> dict[str, Any]:
        self.put_calls.append({"TableName": TableName, "Item": Item})
        if self._put_error is not None:
            raise self._put_error
        return {}


class FakeResponse:
    """Minimal streamed requests.Response stand-in."""

    def __init__(
        self,
        status_code: int = 200,
        chunks: Iterable[bytes] = (b"",),
        headers: dict[str, str] | None = None,
        body_error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.headers = headers or {}
        self.closed = False
        self._chunks = chunks
        self._body_error = body_error

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        if self._body_error is not None:
            raise self._body_error

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """requests.Session stand-in returning a canned response."""

    def __init__(
        self,
        response: FakeResponse | None = None,
        error: requests.RequestException | None = None,
    ) -> None:
        self.response = response or FakeResponse()
        self.calls: list[dict[str, Any]] = []
        self._error = error

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self._error is not None:
            raise self._error
        return self.response


class FakeClock:
    """Manually advanced monotonic clock for deadline tests."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now
