from .task_scheduler import ScheduledTask, TaskScheduler, ThreadTaskScheduler

__all__ = [
    "ScheduledTask",
    "TaskScheduler",
    "ThreadTaskScheduler",
]
