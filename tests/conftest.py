"""Shared fixtures and in-memory fakes."""

from datetime import datetime, timedelta, timezone
from typing import BinaryIO

import pytest

from vocab_capture.exceptions import StorageDownloadError
from vocab_capture.infrastructure.interfaces import StorageClient

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
FIXED_MILLIS = 1714564800000
BUCKET = "vocabulary-app"


class InMemoryStorage(StorageClient):
    """Dictionary-backed storage client."""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.content_types: dict[tuple[str, str], str] = {}
        self.deleted: list[tuple[str, str]] = []

    def download(self, bucket_name: str, object_name: str) -> bytes:
        try:
            return self.objects[(bucket_name, object_name)]
        except KeyError as e:
            raise StorageDownloadError(object_name, e) from e

    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> None:
        self.objects[(bucket_name, object_name)] = data.read()
        self.content_types[(bucket_name, object_name)] = content_type

    def delete(self, bucket_name: str, object_name: str) -> None:
        self.deleted.append((bucket_name, object_name))
        self.objects.pop((bucket_name, object_name), None)

    def presigned_url(
        self, bucket_name: str, object_name: str, expires: timedelta
    ) -> str:
        return f"http://storage.local/{bucket_name}/{object_name}?ttl={int(expires.total_seconds())}"

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        pass

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for _, k in self.objects if k.startswith(prefix))


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
