"""Periodic job scheduling on the event loop or on virtual time."""

import asyncio
from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger

logger = get_logger(__name__)

JobCallback = Callable[[], Awaitable[None]]


class ScheduledJob:
    """Handle of a periodic job."""

    def __init__(self, name: str, interval: float, callback: JobCallback):
        if interval <= 0:
            raise ValueError(f"Job interval must be positive, got {interval}")
        self.name = name
        self.interval = interval
        self.callback = callback
        self.next_due = 0.0
        self._task: asyncio.Task | None = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        if self._task and not self._task.done():
            self._task.cancel()

    async def run_once(self) -> None:
        """Run the callback; a failing tick is logged and the job stays scheduled."""
        try:
            await self.callback()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Scheduled job {self.name} failed: {e}", exc_info=True)


class IScheduler(Protocol):
    """Runs callbacks at a fixed period."""

    def every(self, interval: float, callback: JobCallback, name: str) -> ScheduledJob:
        """Schedule callback every interval seconds, first run after one interval."""
        ...

    def cancel_all(self) -> None:
        ...


class AsyncioScheduler:
    """Each job is a background task sleeping between ticks."""

    def __init__(self):
        self._jobs: list[ScheduledJob] = []

    def every(self, interval: float, callback: JobCallback, name: str) -> ScheduledJob:
        job = ScheduledJob(name, interval, callback)
        job._task = asyncio.create_task(self._loop(job))
        self._jobs.append(job)
        logger.debug(f"Scheduled {name} every {interval}s")
        return job

    def cancel_all(self) -> None:
        for job in self._jobs:
            job.cancel()
        self._jobs.clear()

    async def _loop(self, job: ScheduledJob) -> None:
        while not job.cancelled:
            try:
                await asyncio.sleep(job.interval)
                if job.cancelled:
                    break
                await job.run_once()
            except asyncio.CancelledError:
                break


class VirtualScheduler:
    """Deterministic scheduler for tests: time only moves on advance()."""

    def __init__(self):
        self._now = 0.0
        self._jobs: list[ScheduledJob] = []

    @property
    def now(self) -> float:
        return self._now

    def every(self, interval: float, callback: JobCallback, name: str) -> ScheduledJob:
        job = ScheduledJob(name, interval, callback)
        job.next_due = self._now + interval
        self._jobs.append(job)
        return job

    def cancel_all(self) -> None:
        for job in self._jobs:
            job.cancel()
        self._jobs.clear()

    async def advance(self, seconds: float) -> None:
        """Move time forward, running every tick that falls due in order."""
        target = self._now + seconds
        while True:
            due = [j for j in self._jobs if not j.cancelled and j.next_due <= target]
            if not due:
                break
            job = min(due, key=lambda j: j.next_due)
            self._now = job.next_due
            job.next_due += job.interval
            await job.run_once()
        self._now = target
