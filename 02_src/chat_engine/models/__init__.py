"""Core data models for the chat engine."""

from .intents import ClassificationResult, IntentCategory, RequestContext, Response
from .messages import Attachment, MediaKind, Message, MessageKind, Priority, Sender
from .team import (
    AdvancedAnalytics,
    Competitor,
    CompetitorAnalysis,
    Exercise,
    FitnessMetrics,
    InjuryRecord,
    Intensity,
    MarketAnalysis,
    Match,
    MatchPrediction,
    PerformanceMetrics,
    PersonalInfo,
    Player,
    PlayerEfficiency,
    PlayerStatus,
    TacticalAnalysis,
    TeamDataSnapshot,
    TeamStats,
    TrainingPlan,
    WeatherData,
)
from .tracing import TraceEvent

__all__ = [
    # Messages
    "Sender",
    "MessageKind",
    "Priority",
    "MediaKind",
    "Attachment",
    "Message",
    # Intents
    "IntentCategory",
    "ClassificationResult",
    "RequestContext",
    "Response",
    # Team data
    "PlayerStatus",
    "Intensity",
    "InjuryRecord",
    "PersonalInfo",
    "PerformanceMetrics",
    "Player",
    "TeamStats",
    "Match",
    "MatchPrediction",
    "WeatherData",
    "PlayerEfficiency",
    "TacticalAnalysis",
    "FitnessMetrics",
    "MarketAnalysis",
    "Competitor",
    "CompetitorAnalysis",
    "AdvancedAnalytics",
    "Exercise",
    "TrainingPlan",
    "TeamDataSnapshot",
    # Tracing
    "TraceEvent",
]
