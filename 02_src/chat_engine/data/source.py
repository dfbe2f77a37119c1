"""Team-data snapshot sources and the provider that caches the current one."""

import json
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from ..errors import SnapshotUnavailableError
from ..logging_config import get_logger
from ..models import TeamDataSnapshot
from ..tracker import ITracker
from .defaults import default_snapshot

logger = get_logger(__name__)

_snapshot_adapter = TypeAdapter(TeamDataSnapshot)


class ISnapshotSource(Protocol):
    """External collaborator that yields the current team data."""

    async def load(self) -> TeamDataSnapshot:
        """Return a fresh snapshot or raise SnapshotUnavailableError."""
        ...


class StaticSnapshotSource:
    """Serves a fixed snapshot (tests, demos)."""

    def __init__(self, snapshot: TeamDataSnapshot | None = None):
        self._snapshot = snapshot or default_snapshot()

    async def load(self) -> TeamDataSnapshot:
        return self._snapshot


class JsonFileSnapshotSource:
    """Reads a snapshot exported by the data-management layer as JSON."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    async def load(self) -> TeamDataSnapshot:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _snapshot_adapter.validate_python(raw)
        except (OSError, ValueError, ValidationError) as e:
            raise SnapshotUnavailableError(
                f"Cannot load snapshot from {self._path}: {e}"
            ) from e


class SnapshotProvider:
    """Holds the snapshot handed to each request.

    Starts from the default snapshot, replaces it on every successful
    refresh and keeps the last good one when the source fails.
    """

    def __init__(
        self,
        source: ISnapshotSource | None = None,
        tracker: ITracker | None = None,
        initial: TeamDataSnapshot | None = None,
    ):
        self._source = source
        self._tracker = tracker
        self._current = initial or default_snapshot()
        self._loaded = False
        self._loading = False

    @property
    def current(self) -> TeamDataSnapshot:
        return self._current

    @property
    def loaded(self) -> bool:
        """True once a snapshot came from the source rather than the default."""
        return self._loaded

    @property
    def loading(self) -> bool:
        return self._loading

    def commit(self, snapshot: TeamDataSnapshot) -> None:
        """Swap in a snapshot produced by a copy-on-write handler."""
        self._current = snapshot

    async def refresh(self) -> bool:
        """Reload from the source. Returns False when the old snapshot was kept."""
        if self._source is None:
            return False

        self._loading = True
        try:
            snapshot = await self._source.load()
        except SnapshotUnavailableError as e:
            logger.warning(f"Snapshot refresh failed, keeping previous data: {e}")
            await self._track("snapshot_refresh_failed", {"error": str(e)})
            return False
        finally:
            self._loading = False

        self._current = snapshot
        self._loaded = True
        logger.debug(f"Snapshot refreshed: {len(snapshot.players)} players")
        await self._track(
            "snapshot_refreshed",
            {"team_name": snapshot.team_name, "player_count": len(snapshot.players)},
        )
        return True

    async def _track(self, event_type: str, data: dict) -> None:
        if self._tracker:
            await self._tracker.track(event_type, "snapshot_provider", data)
