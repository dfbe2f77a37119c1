"""Unsolicited, threshold-gated analysis messages."""

import random
import uuid
from datetime import datetime, timezone
from typing import Callable

from ..logging_config import get_logger
from ..models import Message, MessageKind, Priority, Sender, TeamDataSnapshot
from ..tracker import ITracker
from ..transcript import ITranscriptSink
from .scheduler import IScheduler, ScheduledJob

logger = get_logger(__name__)


def insight_statements(snapshot: TeamDataSnapshot) -> list[str]:
    """Candidate statements, one per aspect of the snapshot."""
    analytics = snapshot.analytics
    fitness = analytics.fitness_metrics
    tactical = analytics.tactical_analysis
    weather = snapshot.weather
    performers = " and ".join(analytics.market_analysis.top_performers) or "No players"
    return [
        f"Team fitness average is {fitness.team_average}%. Consider rotation for fatigued players.",
        f"Injury risk is at {fitness.injury_risk}%. Focus on injury prevention training.",
        f"{performers} are showing excellent form. Consider contract renewals.",
        (
            f"Weather conditions ({weather.conditions}, {weather.temperature}°C) "
            "may impact next match performance."
        ),
        (
            f"Tactical analysis shows {tactical.formation} formation is "
            f"{tactical.effectiveness}% effective."
        ),
    ]


class InsightScheduler:
    """Posts a sampled insight each tick when its confidence clears the threshold.

    A tick below the threshold is dropped, not retried.
    """

    def __init__(
        self,
        transcript: ITranscriptSink,
        snapshot: Callable[[], TeamDataSnapshot],
        scheduler: IScheduler,
        tracker: ITracker | None = None,
        threshold: float = 70.0,
        interval_seconds: float = 30.0,
        confidence: float = 85.0,
        enabled: bool = True,
        rng: random.Random | None = None,
    ):
        self._transcript = transcript
        self._snapshot = snapshot
        self._scheduler = scheduler
        self._tracker = tracker
        self._interval = interval_seconds
        self._confidence = confidence
        self._enabled = enabled
        self._rng = rng or random.Random()
        self._job: ScheduledJob | None = None
        self.set_threshold(threshold)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def threshold(self) -> float:
        return self._threshold

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        logger.info(f"Auto analysis {'enabled' if enabled else 'disabled'}")

    def set_threshold(self, value: float) -> None:
        if not 0 <= value <= 100:
            raise ValueError(f"Confidence threshold must be within 0-100, got {value}")
        self._threshold = value

    def start(self) -> None:
        if self._job is None:
            self._job = self._scheduler.every(self._interval, self.tick, "insights")

    def stop(self) -> None:
        if self._job:
            self._job.cancel()
            self._job = None

    def generate(self) -> Message:
        content = self._rng.choice(insight_statements(self._snapshot()))
        return Message(
            id=str(uuid.uuid4()),
            sender=Sender.ENGINE,
            content=content,
            timestamp=datetime.now(timezone.utc),
            kind=MessageKind.ANALYSIS,
            confidence=self._confidence,
            priority=Priority.MEDIUM,
            metadata={"insight": True},
        )

    async def tick(self) -> Message | None:
        """One timer firing. Returns the posted message, if any."""
        if not self._enabled:
            return None

        message = self.generate()
        if message.confidence >= self._threshold:
            await self._transcript.append(message)
            await self._track("insight_posted", message)
            return message

        logger.debug(
            f"Insight dropped: confidence {message.confidence} below {self._threshold}"
        )
        await self._track("insight_dropped", message)
        return None

    async def _track(self, event_type: str, message: Message) -> None:
        if self._tracker:
            await self._tracker.track(
                event_type=event_type,
                actor="insight_scheduler",
                data={
                    "message_id": message.id,
                    "confidence": message.confidence,
                    "threshold": self._threshold,
                },
            )
