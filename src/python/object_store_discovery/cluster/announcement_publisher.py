"""Maintains this node's own announcement object in the directory.

The announcement is written once on ``init``, rewritten on a fixed
schedule so other nodes keep seeing a fresh timestamp, and deleted on
``destroy``. Store failures never escape: a missed refresh only risks
the entry expiring from other nodes' point of view until the next
successful cycle.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from ..codec import AnnouncementCodec
from ..directory import DirectoryClient
from ..metrics import PUBLISH_COUNTER
from ..models import ClusterNodeAddress
from ..scheduling import ScheduledTask, TaskScheduler

logger = logging.getLogger(__name__)

_SECONDS_PER_MINUTE = 60


def current_millis() -> int:
    return int(time.time() * 1000)


class AnnouncementPublisher:
    """Writes, refreshes and removes the local node's directory entry.

    Parameters:
        directory_client: Store holding the directory.
        bucket_name: Bucket containing the directory.
        file_prefix: Key prefix of the directory.
        update_interval_minutes: Refresh period; ``0`` disables refresh.
        scheduler: Runs the refresh cycle. Required when
            ``update_interval_minutes > 0``.
        clock: Returns the current epoch time in milliseconds.
    """

    def __init__(
        self,
        directory_client: DirectoryClient,
        bucket_name: str,
        file_prefix: str = "",
        update_interval_minutes: int = 0,
        scheduler: TaskScheduler | None = None,
        clock: Callable[[], int] = current_millis,
    ) -> None:
        if update_interval_minutes > 0 and scheduler is None:
            raise ValueError("A scheduler is required when update_interval_minutes > 0")
        self._directory = directory_client
        self._bucket = bucket_name
        self._prefix = file_prefix
        self._update_interval_minutes = update_interval_minutes
        self._scheduler = scheduler
        self._clock = clock

        self._cluster_id: str | None = None
        self._own_address: ClusterNodeAddress | None = None
        self._object_key: str | None = None
        self._refresh_task: ScheduledTask | None = None
        # Guards the put in publish_cycle against the delete in destroy
        self._lock = threading.Lock()
        self._destroyed = False

    # ── Properties ────────────────────────────────────────────────

    @property
    def object_key(self) -> str | None:
        return self._object_key

    @property
    def own_address(self) -> ClusterNodeAddress | None:
        return self._own_address

    # ── Lifecycle ─────────────────────────────────────────────────

    def init(self, cluster_id: str, own_address: ClusterNodeAddress) -> None:
        """Publish the announcement and start the refresh schedule."""
        self._cancel_refresh()

        with self._lock:
            self._cluster_id = cluster_id
            self._own_address = own_address
            self._object_key = self._prefix + cluster_id
            self._destroyed = False

        self.publish_cycle()

        if self._update_interval_minutes > 0:
            self._refresh_task = self._scheduler.schedule_at_fixed_rate(
                self.publish_cycle,
                self._update_interval_minutes * _SECONDS_PER_MINUTE,
                name=f"announcement-refresh-{cluster_id}",
            )
            logger.info(
                "Refreshing announcement %s every %d minute(s)",
                self._object_key,
                self._update_interval_minutes,
            )

    def publish_cycle(self) -> None:
        """Encode the announcement with the current time and store it."""
        with self._lock:
            if self._destroyed:
                logger.debug("Announcement %s already removed, skipping publish", self._object_key)
                return
            if self._object_key is None or self._own_address is None:
                logger.warning("Announcement publish requested before init, skipping")
                return
            try:
                payload = AnnouncementCodec.encode(
                    self._cluster_id,
                    self._own_address.host,
                    self._own_address.port,
                    self._clock(),
                )
                self._directory.put(self._bucket, self._object_key, payload)
                PUBLISH_COUNTER.labels(outcome="success").inc()
                logger.debug("Node information updated at %s", self._object_key)
            except Exception:
                PUBLISH_COUNTER.labels(outcome="failure").inc()
                logger.error("Not able to save node information to %s/%s", self._bucket, self._object_key)
                logger.debug("Original exception", exc_info=True)

    def destroy(self) -> None:
        """Stop refreshing, then delete the announcement (best effort)."""
        self._cancel_refresh()

        with self._lock:
            if self._object_key is None:
                logger.warning("Announcement destroy requested before init, nothing to delete")
                return
            self._destroyed = True
            try:
                self._directory.delete(self._bucket, self._object_key)
                logger.info("Node information removed from %s", self._object_key)
            except Exception:
                logger.error("Not able to delete node information %s/%s", self._bucket, self._object_key)
                logger.debug("Original exception", exc_info=True)

    def _cancel_refresh(self) -> None:
        task, self._refresh_task = self._refresh_task, None
        if task is not None:
            task.cancel()
