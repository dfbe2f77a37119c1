"""Scheduling module."""

from .insights import InsightScheduler, insight_statements
from .scheduler import (
    AsyncioScheduler,
    IScheduler,
    JobCallback,
    ScheduledJob,
    VirtualScheduler,
)

__all__ = [
    "AsyncioScheduler",
    "IScheduler",
    "InsightScheduler",
    "JobCallback",
    "ScheduledJob",
    "VirtualScheduler",
    "insight_statements",
]
