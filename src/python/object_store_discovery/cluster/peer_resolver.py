"""Turns the shared directory into a set of peer addresses.

Every call performs a fresh, full resolution:

1. List every key under the prefix, following continuation tokens
   until the last page.
2. Read each object. A key deleted between list and read is simply
   not a peer this round.
3. Decode it. Malformed payloads are skipped and left untouched (they
   may belong to a newer protocol version). Expired payloads are
   deleted, whoever owns them, so the directory repairs itself.

Nothing is locked: concurrent resolvers may both try to delete the
same expired key, and a refresh may race a read of the same key.
Both outcomes are valid under the store's eventual consistency.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from ..codec import AnnouncementCodec
from ..directory import DirectoryClient
from ..exceptions import MalformedAnnouncementError, ObjectNotFoundError, StaleAnnouncementError
from ..metrics import RESOLVE_HISTOGRAM, RESOLVED_PEERS, SKIPPED_ENTRIES_COUNTER, STALE_DELETES_COUNTER
from ..models import ClusterNodeAddress
from .announcement_publisher import current_millis

logger = logging.getLogger(__name__)


class PeerResolver:
    """Resolves the live peers announced in the directory.

    Parameters:
        directory_client: Store holding the directory.
        bucket_name: Bucket containing the directory.
        file_prefix: Key prefix of the directory.
        expiration_minutes: Maximum announcement age; ``0`` disables
            expiry and directory repair.
        clock: Returns the current epoch time in milliseconds.
    """

    def __init__(
        self,
        directory_client: DirectoryClient,
        bucket_name: str,
        file_prefix: str = "",
        expiration_minutes: int = 0,
        clock: Callable[[], int] = current_millis,
    ) -> None:
        self._directory = directory_client
        self._bucket = bucket_name
        self._prefix = file_prefix
        self._expiration_minutes = expiration_minutes
        self._clock = clock

    def resolve(self) -> set[ClusterNodeAddress]:
        """Return the addresses of every live announcement, including our own.

        Never raises. If the directory cannot be listed the result is
        empty rather than partial.
        """
        with RESOLVE_HISTOGRAM.time():
            try:
                keys = list(self._iter_keys())
            except Exception:
                logger.error("Not able to list directory %s/%s", self._bucket, self._prefix)
                logger.debug("Original exception", exc_info=True)
                return set()

            addresses: set[ClusterNodeAddress] = set()
            for key in keys:
                try:
                    address = self._read_address(key)
                except Exception:
                    logger.exception("Unexpected error while resolving directory entry %s", key)
                    continue
                if address is not None:
                    addresses.add(address)

        RESOLVED_PEERS.set(len(addresses))
        logger.debug("Resolved %d peer(s) from %d directory entries", len(addresses), len(keys))
        return addresses

    # ── Internals ─────────────────────────────────────────────────

    def _iter_keys(self) -> Iterator[str]:
        """Yield every key under the prefix, one page at a time."""
        token: str | None = None
        while True:
            page = self._directory.list_page(self._bucket, self._prefix, token)
            yield from page.keys
            if not page.is_truncated:
                return
            token = page.next_token

    def _read_address(self, key: str) -> ClusterNodeAddress | None:
        try:
            payload = self._directory.get(self._bucket, key)
        except ObjectNotFoundError:
            # Deleted since listing by its owner or another resolver
            SKIPPED_ENTRIES_COUNTER.labels(reason="not_found").inc()
            return None
        except Exception as e:
            SKIPPED_ENTRIES_COUNTER.labels(reason="read_error").inc()
            logger.debug("Not able to read object %s: %s", key, e)
            return None

        try:
            announcement = AnnouncementCodec.decode(payload, self._expiration_minutes, self._clock())
        except StaleAnnouncementError:
            SKIPPED_ENTRIES_COUNTER.labels(reason="stale").inc()
            logger.debug("Object %s expired, deleting it", key)
            self._delete_stale(key)
            return None
        except MalformedAnnouncementError as e:
            SKIPPED_ENTRIES_COUNTER.labels(reason="malformed").inc()
            logger.debug("Not able to parse contents of object '%s': %s", key, e.reason)
            return None

        return announcement.address

    def _delete_stale(self, key: str) -> None:
        try:
            self._directory.delete(self._bucket, key)
            STALE_DELETES_COUNTER.labels(outcome="success").inc()
        except Exception:
            STALE_DELETES_COUNTER.labels(outcome="failure").inc()
            logger.debug("Not able to delete expired object %s", key, exc_info=True)
