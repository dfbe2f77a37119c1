"""Conversational command engine for the team assistant."""

from .app import Application, IApplication
from .classifier import ConfidenceWeights, IIntentClassifier, IntentClassifier
from .config import EngineConfig
from .data import (
    ISnapshotSource,
    JsonFileSnapshotSource,
    SnapshotProvider,
    StaticSnapshotSource,
    default_snapshot,
)
from .dispatch import CancellationToken, DispatchEngine, FallbackStrategy, IDispatchEngine
from .errors import (
    ChatEngineError,
    RateLimitExceeded,
    RemoteServiceError,
    SnapshotUnavailableError,
)
from .handlers import HandlerRegistry
from .models import (
    Attachment,
    ClassificationResult,
    IntentCategory,
    Message,
    MessageKind,
    Priority,
    RequestContext,
    Response,
    Sender,
    TeamDataSnapshot,
    TraceEvent,
)
from .remote import (
    AnthropicAssistantService,
    GuardedAssistantService,
    IAssistantService,
    RemoteReply,
)
from .scheduling import AsyncioScheduler, InsightScheduler, IScheduler, VirtualScheduler
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .transcript import ITranscriptSink, Transcript

__all__ = [
    # Application
    "Application",
    "IApplication",
    "EngineConfig",
    # Models
    "Attachment",
    "ClassificationResult",
    "IntentCategory",
    "Message",
    "MessageKind",
    "Priority",
    "RequestContext",
    "Response",
    "Sender",
    "TeamDataSnapshot",
    "TraceEvent",
    # Errors
    "ChatEngineError",
    "RateLimitExceeded",
    "RemoteServiceError",
    "SnapshotUnavailableError",
    # Components
    "IIntentClassifier",
    "IntentClassifier",
    "ConfidenceWeights",
    "HandlerRegistry",
    "FallbackStrategy",
    "IDispatchEngine",
    "DispatchEngine",
    "CancellationToken",
    "IAssistantService",
    "AnthropicAssistantService",
    "GuardedAssistantService",
    "RemoteReply",
    "IScheduler",
    "AsyncioScheduler",
    "VirtualScheduler",
    "InsightScheduler",
    "ITranscriptSink",
    "Transcript",
    "ISnapshotSource",
    "StaticSnapshotSource",
    "JsonFileSnapshotSource",
    "SnapshotProvider",
    "default_snapshot",
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
]
