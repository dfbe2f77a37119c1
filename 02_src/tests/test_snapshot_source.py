"""Tests for snapshot sources and SnapshotProvider."""

import dataclasses
import json
from datetime import date

import pytest

from chat_engine.data import (
    JsonFileSnapshotSource,
    SnapshotProvider,
    StaticSnapshotSource,
    default_snapshot,
)
from chat_engine.errors import SnapshotUnavailableError
from chat_engine.models import PlayerStatus


def write_snapshot(path, **changes):
    data = dataclasses.asdict(default_snapshot())
    data.update(changes)
    path.write_text(json.dumps(data, default=str), encoding="utf-8")
    return path


class TestDefaultSnapshot:
    """Tests for the built-in snapshot."""

    def test_demo_squad(self):
        snapshot = default_snapshot()

        assert snapshot.team_name == "Demo FC"
        assert [p.name for p in snapshot.players] == ["Torres", "Silva", "Rodriguez", "Martinez"]
        assert snapshot.team_stats.wins == 18
        assert snapshot.analytics.fitness_metrics.injury_risk == 23


class TestJsonFileSnapshotSource:
    """Tests for loading snapshots from JSON files."""

    @pytest.mark.asyncio
    async def test_load_valid_file(self, tmp_path):
        path = write_snapshot(tmp_path / "team.json", team_name="File FC")

        snapshot = await JsonFileSnapshotSource(path).load()

        assert snapshot.team_name == "File FC"
        assert len(snapshot.players) == 4
        assert snapshot.players[2].status == PlayerStatus.INJURED
        assert snapshot.players[2].injury_history[0].date == date(2024, 1, 15)
        assert snapshot.upcoming_matches[0].opponent == "Real Madrid"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        source = JsonFileSnapshotSource(tmp_path / "missing.json")

        with pytest.raises(SnapshotUnavailableError):
            await source.load()

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path):
        path = tmp_path / "team.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotUnavailableError):
            await JsonFileSnapshotSource(path).load()

    @pytest.mark.asyncio
    async def test_invalid_shape(self, tmp_path):
        """Test that a structurally wrong document is rejected."""
        path = write_snapshot(tmp_path / "team.json", players="everyone")

        with pytest.raises(SnapshotUnavailableError):
            await JsonFileSnapshotSource(path).load()


class TestSnapshotProvider:
    """Tests for SnapshotProvider."""

    def test_starts_with_default(self):
        provider = SnapshotProvider()

        assert provider.current.team_name == "Demo FC"
        assert provider.loaded is False
        assert provider.loading is False

    @pytest.mark.asyncio
    async def test_refresh_without_source(self):
        provider = SnapshotProvider()

        assert await provider.refresh() is False

    @pytest.mark.asyncio
    async def test_refresh_replaces_snapshot(self, tracker, storage):
        loaded = dataclasses.replace(default_snapshot(), team_name="Loaded FC")
        provider = SnapshotProvider(StaticSnapshotSource(loaded), tracker)

        assert await provider.refresh() is True

        assert provider.current.team_name == "Loaded FC"
        assert provider.loaded is True
        events = await storage.get_trace_events(event_types=["snapshot_refreshed"])
        assert events[0].data == {"team_name": "Loaded FC", "player_count": 4}

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_last_good(self, tmp_path, tracker, storage):
        """Test that a broken source leaves the previous snapshot in place."""
        path = write_snapshot(tmp_path / "team.json", team_name="File FC")
        provider = SnapshotProvider(JsonFileSnapshotSource(path), tracker)
        await provider.refresh()

        path.write_text("broken", encoding="utf-8")
        assert await provider.refresh() is False

        assert provider.current.team_name == "File FC"
        assert provider.loading is False
        events = await storage.get_trace_events(event_types=["snapshot_refresh_failed"])
        assert len(events) == 1

    def test_commit(self, provider, snapshot):
        updated = dataclasses.replace(snapshot, players=snapshot.players[:1])

        provider.commit(updated)

        assert provider.current is updated
