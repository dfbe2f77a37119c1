"""Team data sources."""

from .defaults import default_snapshot
from .source import (
    ISnapshotSource,
    JsonFileSnapshotSource,
    SnapshotProvider,
    StaticSnapshotSource,
)

__all__ = [
    "default_snapshot",
    "ISnapshotSource",
    "JsonFileSnapshotSource",
    "SnapshotProvider",
    "StaticSnapshotSource",
]
