"""Platform services: timers and event-loop integration."""

from .scheduler import AsyncioScheduler, ManualScheduler, SchedulerProtocol, delay

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "SchedulerProtocol",
    "delay",
]
