"""Abstract base class for the shared object directory.

Discovery only needs four operations against named objects in a
bucket. Implementations wrap a concrete object store (S3, an
S3-compatible service, or an in-process dict for tests).
"""

from __future__ import annotations

import abc

from ..models import ObjectListingPage


class DirectoryClient(abc.ABC):
    """Interface over the object store used as the discovery medium.

    Every method may block on network I/O. Timeouts are the
    implementation's responsibility. Failures other than a missing
    object surface as :class:`~object_store_discovery.exceptions.DirectoryClientError`.
    """

    @abc.abstractmethod
    def put(self, bucket: str, key: str, data: bytes) -> None:
        """Create or overwrite the object ``key``."""
        ...

    @abc.abstractmethod
    def get(self, bucket: str, key: str) -> bytes:
        """Return the content of ``key``.

        Raises:
            ObjectNotFoundError: The object does not exist at call time.
                Callers must tolerate this for keys they just listed.
        """
        ...

    @abc.abstractmethod
    def list_page(
        self,
        bucket: str,
        prefix: str,
        continuation_token: str | None = None,
    ) -> ObjectListingPage:
        """Return one page of keys starting with ``prefix``.

        Args:
            bucket: Bucket to list.
            prefix: Key prefix; ``""`` lists the whole bucket.
            continuation_token: ``next_token`` of the previous page, or
                ``None`` for the first page.
        """
        ...

    @abc.abstractmethod
    def delete(self, bucket: str, key: str) -> None:
        """Delete ``key``. Deleting a missing object is not an error."""
        ...
