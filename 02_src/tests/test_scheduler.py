"""Tests for job schedulers."""

import asyncio

import pytest

from chat_engine.scheduling import AsyncioScheduler, ScheduledJob, VirtualScheduler


class TestScheduledJob:
    """Tests for ScheduledJob."""

    def test_interval_must_be_positive(self):
        async def noop():
            pass

        with pytest.raises(ValueError):
            ScheduledJob("bad", 0, noop)

    @pytest.mark.asyncio
    async def test_run_once_logs_failure(self):
        """Test that a failing callback does not propagate."""
        async def failing():
            raise RuntimeError("tick failed")

        job = ScheduledJob("failing", 1, failing)

        await job.run_once()


class TestVirtualScheduler:
    """Tests for the deterministic scheduler."""

    @pytest.mark.asyncio
    async def test_first_run_after_one_interval(self):
        scheduler = VirtualScheduler()
        ticks = []

        async def record():
            ticks.append(scheduler.now)

        scheduler.every(30, record, "record")

        await scheduler.advance(29)
        assert ticks == []

        await scheduler.advance(1)
        assert ticks == [30]

        await scheduler.advance(65)
        assert ticks == [30, 60, 90]
        assert scheduler.now == 95

    @pytest.mark.asyncio
    async def test_jobs_interleave_in_time_order(self):
        scheduler = VirtualScheduler()
        order = []

        async def fast():
            order.append(("fast", scheduler.now))

        async def slow():
            order.append(("slow", scheduler.now))

        scheduler.every(20, slow, "slow")
        scheduler.every(15, fast, "fast")

        await scheduler.advance(45)

        assert order == [("fast", 15), ("slow", 20), ("fast", 30), ("slow", 40), ("fast", 45)]

    @pytest.mark.asyncio
    async def test_cancelled_job_stops(self):
        scheduler = VirtualScheduler()
        ticks = []

        async def record():
            ticks.append(scheduler.now)

        job = scheduler.every(10, record, "record")
        await scheduler.advance(10)
        job.cancel()
        await scheduler.advance(50)

        assert ticks == [10]
        assert job.cancelled

    @pytest.mark.asyncio
    async def test_failing_job_keeps_running(self):
        """Test that one failed tick does not unschedule the job."""
        scheduler = VirtualScheduler()
        calls = []

        async def flaky():
            calls.append(scheduler.now)
            if len(calls) == 1:
                raise RuntimeError("first tick fails")

        scheduler.every(10, flaky, "flaky")
        await scheduler.advance(30)

        assert calls == [10, 20, 30]

    @pytest.mark.asyncio
    async def test_cancel_all(self):
        scheduler = VirtualScheduler()
        ticks = []

        async def record():
            ticks.append(scheduler.now)

        scheduler.every(10, record, "a")
        scheduler.every(10, record, "b")
        scheduler.cancel_all()
        await scheduler.advance(100)

        assert ticks == []


class TestAsyncioScheduler:
    """Tests for the event-loop scheduler."""

    @pytest.mark.asyncio
    async def test_runs_and_cancels(self):
        scheduler = AsyncioScheduler()
        ticked = asyncio.Event()

        async def record():
            ticked.set()

        job = scheduler.every(0.01, record, "record")
        await asyncio.wait_for(ticked.wait(), timeout=1.0)

        scheduler.cancel_all()
        await asyncio.sleep(0)

        assert job.cancelled
