"""Fixed-rate task scheduling for background discovery work.

Each scheduled task runs on its own daemon thread that sleeps on a
cancellation event between runs, so ``cancel()`` takes effect
immediately instead of after the current interval.
"""

from __future__ import annotations

import abc
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class ScheduledTask(abc.ABC):
    """Handle to a scheduled recurring task."""

    @abc.abstractmethod
    def cancel(self) -> None:
        """Stop future runs. Safe to call more than once.

        When called from another thread, returns only after any run in
        progress has finished.
        """
        ...

    @property
    @abc.abstractmethod
    def cancelled(self) -> bool:
        ...


class TaskScheduler(abc.ABC):
    """Capability to run a callback repeatedly at a fixed interval."""

    @abc.abstractmethod
    def schedule_at_fixed_rate(
        self,
        callback: Callable[[], None],
        interval_seconds: float,
        name: str = "scheduled-task",
    ) -> ScheduledTask:
        """Run ``callback`` every ``interval_seconds`` until cancelled.

        The first run happens one interval after scheduling.
        """
        ...

    def shutdown(self) -> None:
        """Cancel every task started by this scheduler."""


class _ThreadScheduledTask(ScheduledTask):

    def __init__(self, callback: Callable[[], None], interval_seconds: float, name: str) -> None:
        self._callback = callback
        self._interval = interval_seconds
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stop_event.set()
        # The callback itself may cancel its own task
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            # No run may be in flight once cancel returns
            self._thread.join()

    def _loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Scheduled task %s failed", self._thread.name)


class ThreadTaskScheduler(TaskScheduler):
    """:class:`TaskScheduler` backed by one daemon thread per task."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: list[_ThreadScheduledTask] = []

    def schedule_at_fixed_rate(
        self,
        callback: Callable[[], None],
        interval_seconds: float,
        name: str = "scheduled-task",
    ) -> ScheduledTask:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        task = _ThreadScheduledTask(callback, interval_seconds, name)
        with self._lock:
            self._tasks = [t for t in self._tasks if not t.cancelled]
            self._tasks.append(task)
        task.start()
        logger.debug("Scheduled %s every %.1fs", name, interval_seconds)
        return task

    def shutdown(self) -> None:
        with self._lock:
            tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
