"""Shared fakes for discovery tests."""

from __future__ import annotations

from typing import Callable

import pytest

from object_store_discovery.directory import InMemoryDirectoryClient
from object_store_discovery.exceptions import DirectoryClientError
from object_store_discovery.scheduling import ScheduledTask, TaskScheduler

BUCKET = "discovery-bucket"
PREFIX = "cluster/"
T0 = 1_700_000_000_000


class FakeClock:
    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance_minutes(self, minutes: float) -> None:
        self.now += int(minutes * 60_000)


class RecordingDirectoryClient(InMemoryDirectoryClient):
    """In-memory directory that records calls and can inject failures."""

    def __init__(self, page_size: int = 1000, events: list | None = None) -> None:
        super().__init__(page_size=page_size)
        self.events = events if events is not None else []
        self.read_keys: list[str] = []
        self.deleted_keys: list[str] = []
        self.listed_tokens: list[str | None] = []
        self.failing_reads: set[str] = set()
        self.vanishing_keys: set[str] = set()
        self.fail_puts = False
        self.fail_deletes = False
        self.fail_lists = False

    def put(self, bucket, key, data):
        self.events.append(("put", key))
        if self.fail_puts:
            raise DirectoryClientError(bucket, key, reason="throttled")
        super().put(bucket, key, data)

    def get(self, bucket, key):
        self.read_keys.append(key)
        if key in self.failing_reads:
            raise DirectoryClientError(bucket, key, reason="access denied")
        if key in self.vanishing_keys:
            # Another node deleted the object between list and get
            super().delete(bucket, key)
        return super().get(bucket, key)

    def list_page(self, bucket, prefix, continuation_token=None):
        self.listed_tokens.append(continuation_token)
        if self.fail_lists:
            raise DirectoryClientError(bucket, prefix, reason="service unavailable")
        return super().list_page(bucket, prefix, continuation_token)

    def delete(self, bucket, key):
        self.events.append(("delete", key))
        self.deleted_keys.append(key)
        if self.fail_deletes:
            raise DirectoryClientError(bucket, key, reason="throttled")
        super().delete(bucket, key)


class FakeScheduledTask(ScheduledTask):
    def __init__(self, events: list) -> None:
        self._events = events
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._events.append(("cancel", None))
        self._cancelled = True


class FakeScheduler(TaskScheduler):
    """Records scheduled callbacks instead of running them."""

    def __init__(self, events: list | None = None) -> None:
        self.events = events if events is not None else []
        self.scheduled: list[tuple[Callable[[], None], float, FakeScheduledTask]] = []

    def schedule_at_fixed_rate(self, callback, interval_seconds, name="scheduled-task"):
        task = FakeScheduledTask(self.events)
        self.scheduled.append((callback, interval_seconds, task))
        return task

    def fire(self) -> None:
        for callback, _, task in self.scheduled:
            if not task.cancelled:
                callback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def events() -> list:
    return []


@pytest.fixture
def directory(events) -> RecordingDirectoryClient:
    return RecordingDirectoryClient(events=events)


@pytest.fixture
def scheduler(events) -> FakeScheduler:
    return FakeScheduler(events=events)
