"""Application bootstrap and lifecycle management."""

from typing import Any, Protocol

from .classifier import IntentClassifier
from .config import EngineConfig, resolve_db_path
from .data import ISnapshotSource, JsonFileSnapshotSource, SnapshotProvider
from .dispatch import DispatchEngine, FallbackStrategy
from .handlers import HandlerRegistry
from .logging_config import get_logger
from .models import Attachment, Message, RequestContext
from .remote import AnthropicAssistantService, GuardedAssistantService, IAssistantService
from .scheduling import AsyncioScheduler, InsightScheduler, IScheduler
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .transcript import Transcript

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap, lifecycle and the inbound interface of the engine."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Cancel timers and shut down in reverse order."""
        ...

    async def submit(self, text: str) -> Message | None:
        ...

    def set_confidence_threshold(self, value: float) -> None:
        ...

    def set_auto_analysis_enabled(self, enabled: bool) -> None:
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        remote: IAssistantService | None = None,
        source: ISnapshotSource | None = None,
        scheduler: IScheduler | None = None,
    ):
        self._config = config or EngineConfig.from_env()
        self._db_path = resolve_db_path(self._config.db_path)
        self._remote = remote
        self._source = source
        self._scheduler = scheduler

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._snapshots: SnapshotProvider | None = None
        self._transcript: Transcript | None = None
        self._engine: DispatchEngine | None = None
        self._insights: InsightScheduler | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")
        config = self._config

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. Team data; the default snapshot serves until the source answers
        if self._source is None and config.snapshot_path:
            self._source = JsonFileSnapshotSource(config.snapshot_path)
        self._snapshots = SnapshotProvider(self._source, self._tracker)
        await self._snapshots.refresh()
        logger.info(
            f"Snapshot ready: {self._snapshots.current.team_name} "
            f"({'loaded' if self._snapshots.loaded else 'default'})"
        )

        # 4. Remote AI service (optional)
        if self._remote is None and config.anthropic_api_key:
            self._remote = GuardedAssistantService(
                AnthropicAssistantService(
                    api_key=config.anthropic_api_key,
                    model=config.anthropic_model,
                    default_confidence=config.remote_default_confidence,
                )
            )
        if self._remote is None:
            logger.info("Remote AI service not configured, answering locally")

        # 5. Transcript + DispatchEngine
        self._transcript = Transcript()
        fallback = FallbackStrategy(
            IntentClassifier(usefulness_floor=config.usefulness_floor),
            HandlerRegistry(),
            self._tracker,
        )
        self._engine = DispatchEngine(
            transcript=self._transcript,
            fallback=fallback,
            snapshots=self._snapshots,
            context=RequestContext(
                user_id=config.user_id,
                sport=config.sport,
                language=config.language,
                is_premium=config.is_premium,
            ),
            remote=self._remote,
            tracker=self._tracker,
            remote_timeout=config.remote_timeout_seconds,
            remote_min_confidence=config.remote_min_confidence,
        )

        # 6. Timers: insights and snapshot refresh
        if self._scheduler is None:
            self._scheduler = AsyncioScheduler()
        snapshots = self._snapshots
        self._insights = InsightScheduler(
            transcript=self._transcript,
            snapshot=lambda: snapshots.current,
            scheduler=self._scheduler,
            tracker=self._tracker,
            threshold=config.confidence_threshold,
            interval_seconds=config.insight_interval_seconds,
            confidence=config.insight_confidence,
            enabled=config.auto_analysis_enabled,
        )
        self._insights.start()
        self._scheduler.every(config.refresh_interval_seconds, self._refresh, "snapshot_refresh")
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Cancel timers and shut down in reverse order."""
        if self._insights:
            self._insights.stop()
        if self._scheduler:
            self._scheduler.cancel_all()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def submit(self, text: str, attachments: tuple[Attachment, ...] = ()) -> Message | None:
        return await self.engine.submit(text, attachments)

    def set_confidence_threshold(self, value: float) -> None:
        """Raises ValueError outside 0-100."""
        self.insights.set_threshold(value)

    def set_auto_analysis_enabled(self, enabled: bool) -> None:
        self.insights.set_enabled(enabled)

    def status(self) -> dict[str, Any]:
        snapshot = self.snapshots.current
        return {
            "loading": self.engine.loading,
            "snapshot_loaded": self.snapshots.loaded,
            "team_name": snapshot.team_name,
            "player_count": len(snapshot.players),
            "transcript_length": len(self.transcript),
            "remote_enabled": self._remote is not None,
            "confidence_threshold": self.insights.threshold,
            "auto_analysis_enabled": self.insights.enabled,
        }

    async def _refresh(self) -> None:
        await self.snapshots.refresh()

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if self._storage is None:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def snapshots(self) -> SnapshotProvider:
        if self._snapshots is None:
            raise RuntimeError("Application not started")
        return self._snapshots

    @property
    def transcript(self) -> Transcript:
        if self._transcript is None:
            raise RuntimeError("Application not started")
        return self._transcript

    @property
    def engine(self) -> DispatchEngine:
        if self._engine is None:
            raise RuntimeError("Application not started")
        return self._engine

    @property
    def insights(self) -> InsightScheduler:
        if self._insights is None:
            raise RuntimeError("Application not started")
        return self._insights
