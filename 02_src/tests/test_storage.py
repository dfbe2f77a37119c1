"""Tests for Storage."""

from datetime import datetime, timezone

import pytest

from chat_engine.models import TraceEvent
from chat_engine.storage import Storage


def make_event(event_id, event_type="message_received", actor="dispatch_engine", minute=0):
    return TraceEvent(
        id=event_id,
        event_type=event_type,
        actor=actor,
        data={"id": event_id},
        timestamp=datetime(2024, 1, 1, 12, minute, 0, tzinfo=timezone.utc),
    )


class TestStorageInit:
    """Tests for Storage initialization."""

    async def test_init_creates_tables(self, storage):
        """Test that init creates the trace table."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "trace_events" in tables

    async def test_not_initialized(self):
        """Test that use before init raises RuntimeError."""
        storage = Storage(":memory:")

        with pytest.raises(RuntimeError):
            await storage.get_trace_events()


class TestStorageTraceEvents:
    """Tests for TraceEvent storage."""

    async def test_save_and_get(self, storage):
        await storage.save_trace_event(make_event("e1"))

        events = await storage.get_trace_events()
        assert len(events) == 1
        assert events[0].id == "e1"
        assert events[0].data == {"id": "e1"}
        assert events[0].timestamp == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    async def test_newest_first(self, storage):
        await storage.save_trace_event(make_event("e1", minute=0))
        await storage.save_trace_event(make_event("e2", minute=1))
        await storage.save_trace_event(make_event("e3", minute=2))

        events = await storage.get_trace_events()
        assert [e.id for e in events] == ["e3", "e2", "e1"]

    async def test_filter_after(self, storage):
        await storage.save_trace_event(make_event("e1", minute=0))
        await storage.save_trace_event(make_event("e2", minute=1))
        await storage.save_trace_event(make_event("e3", minute=2))

        events = await storage.get_trace_events(
            after=datetime(2024, 1, 1, 12, 1, tzinfo=timezone.utc)
        )
        assert [e.id for e in events] == ["e3"]

    async def test_filter_after_naive_is_utc(self, storage):
        await storage.save_trace_event(make_event("e1", minute=0))
        await storage.save_trace_event(make_event("e2", minute=5))

        events = await storage.get_trace_events(after=datetime(2024, 1, 1, 12, 1))
        assert [e.id for e in events] == ["e2"]

    async def test_filter_by_type_and_actor(self, storage):
        await storage.save_trace_event(make_event("e1", event_type="insight_posted", actor="insight_scheduler"))
        await storage.save_trace_event(make_event("e2", event_type="fallback_used"))
        await storage.save_trace_event(make_event("e3", event_type="remote_failed"))

        by_type = await storage.get_trace_events(event_types=["fallback_used", "remote_failed"])
        assert {e.id for e in by_type} == {"e2", "e3"}

        by_actor = await storage.get_trace_events(actor="insight_scheduler")
        assert [e.id for e in by_actor] == ["e1"]

    async def test_limit(self, storage):
        for i in range(5):
            await storage.save_trace_event(make_event(f"e{i}", minute=i))

        events = await storage.get_trace_events(limit=2)
        assert [e.id for e in events] == ["e4", "e3"]

    async def test_non_json_data_stored_as_text(self, storage):
        """Test that values like dates are serialized with str()."""
        event = TraceEvent(
            id="e1",
            event_type="snapshot_refreshed",
            actor="snapshot_provider",
            data={"day": datetime(2024, 3, 1).date()},
            timestamp=datetime.now(timezone.utc),
        )
        await storage.save_trace_event(event)

        events = await storage.get_trace_events()
        assert events[0].data == {"day": "2024-03-01"}

    async def test_clear(self, storage):
        await storage.save_trace_event(make_event("e1"))

        await storage.clear()

        assert await storage.get_trace_events() == []
