"""Intent classification and response models."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from .messages import Message, MessageKind, Priority, Sender
from .team import TeamDataSnapshot


class IntentCategory(str, Enum):
    """Closed set of request kinds the engine understands."""

    PLAYER_MANAGEMENT = "playerManagement"
    TEAM_ANALYSIS = "teamAnalysis"
    MATCH_PREDICTION = "matchPrediction"
    INJURY_ANALYSIS = "injuryAnalysis"
    TACTICAL_ADVICE = "tacticalAdvice"
    TRAINING_PLAN = "trainingPlan"
    MARKET_ANALYSIS = "marketAnalysis"
    WEATHER_IMPACT = "weatherImpact"
    COMPETITOR_ANALYSIS = "competitorAnalysis"
    FITNESS_TRACKING = "fitnessTracking"
    PERFORMANCE_OPTIMIZATION = "performanceOptimization"
    MATCH_PREPARATION = "matchPreparation"
    GENERAL = "general"


@dataclass(frozen=True)
class ClassificationResult:
    category: IntentCategory
    confidence: float


@dataclass(frozen=True)
class RequestContext:
    """Per-request facts about the caller, passed explicitly to handlers."""

    user_id: str = "demo-user"
    sport: str = "soccer"
    language: str = "en"
    is_premium: bool = False
    today: date = field(default_factory=date.today)


@dataclass(frozen=True)
class Response:
    """Structured answer produced by a handler, the fallback or the remote service."""

    content: str
    kind: MessageKind
    confidence: float
    priority: Priority | None = None
    suggestions: tuple[str, ...] = ()
    follow_up_questions: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)
    # New snapshot when the handler changed team data (copy-on-write).
    snapshot: TeamDataSnapshot | None = field(default=None, compare=False, repr=False)

    def to_message(self) -> Message:
        """Wrap as an engine transcript message with a fresh id and timestamp."""
        return Message(
            id=str(uuid.uuid4()),
            sender=Sender.ENGINE,
            content=self.content,
            timestamp=datetime.now(timezone.utc),
            kind=self.kind,
            confidence=self.confidence,
            priority=self.priority,
            suggestions=self.suggestions,
            follow_up_questions=self.follow_up_questions,
            metadata=dict(self.metadata),
        )
