"""In-process directory backed by a dict.

Useful for single-host clusters, local development and tests. Keys
are listed in lexicographic order, like S3, and split into pages of
``page_size`` keys.
"""

from __future__ import annotations

import threading

from ..exceptions import ObjectNotFoundError
from ..models import ObjectListingPage
from .directory_client import DirectoryClient


class InMemoryDirectoryClient(DirectoryClient):
    """Thread-safe in-memory :class:`DirectoryClient`.

    Data is stored as ``{bucket: {key: bytes}}``. Continuation tokens
    are the last key of the previous page.

    Parameters:
        page_size: Maximum number of keys returned per listing page.
    """

    def __init__(self, page_size: int = 1000) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._page_size = page_size
        self._lock = threading.Lock()
        self._buckets: dict[str, dict[str, bytes]] = {}

    def put(self, bucket: str, key: str, data: bytes) -> None:
        with self._lock:
            self._buckets.setdefault(bucket, {})[key] = bytes(data)

    def get(self, bucket: str, key: str) -> bytes:
        with self._lock:
            objects = self._buckets.get(bucket, {})
            if key not in objects:
                raise ObjectNotFoundError(bucket, key)
            return objects[key]

    def list_page(
        self,
        bucket: str,
        prefix: str,
        continuation_token: str | None = None,
    ) -> ObjectListingPage:
        with self._lock:
            keys = sorted(
                k for k in self._buckets.get(bucket, {}) if k.startswith(prefix)
            )
        if continuation_token is not None:
            keys = [k for k in keys if k > continuation_token]

        page = keys[: self._page_size]
        next_token = page[-1] if len(keys) > self._page_size else None
        return ObjectListingPage(keys=page, next_token=next_token)

    def delete(self, bucket: str, key: str) -> None:
        with self._lock:
            self._buckets.get(bucket, {}).pop(key, None)

    def keys(self, bucket: str) -> list[str]:
        """Return every key currently stored in ``bucket``."""
        with self._lock:
            return sorted(self._buckets.get(bucket, {}))
