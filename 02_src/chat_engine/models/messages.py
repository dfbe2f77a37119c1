"""Transcript message models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Sender(str, Enum):
    """Who authored a transcript message."""

    USER = "user"
    ENGINE = "engine"


class MessageKind(str, Enum):
    """Semantic kind of a message, used by the UI for styling."""

    TEXT = "text"
    ANALYSIS = "analysis"
    PREDICTION = "prediction"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Priority(str, Enum):
    """Domain severity of an engine message."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MediaKind(str, Enum):
    """Attachment media type."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    DATA = "data"


@dataclass(frozen=True)
class Attachment:
    """A file attached to a message at creation time."""

    id: str
    name: str
    media_kind: MediaKind
    size_bytes: int
    location_ref: str


@dataclass(frozen=True)
class Message:
    """A single transcript entry. Immutable once appended."""

    id: str
    sender: Sender
    content: str
    timestamp: datetime
    kind: MessageKind = MessageKind.TEXT
    confidence: float | None = None
    priority: Priority | None = None
    attachments: tuple[Attachment, ...] = ()
    suggestions: tuple[str, ...] = ()
    follow_up_questions: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_user(
        cls, content: str, attachments: tuple[Attachment, ...] = ()
    ) -> "Message":
        """Create a user message stamped now."""
        return cls(
            id=str(uuid.uuid4()),
            sender=Sender.USER,
            content=content,
            timestamp=datetime.now(timezone.utc),
            kind=MessageKind.TEXT,
            attachments=attachments,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "id": self.id,
            "sender": self.sender.value,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
            "kind": self.kind.value,
            "confidence": self.confidence,
            "priority": self.priority.value if self.priority else None,
            "attachments": [
                {
                    "id": a.id,
                    "name": a.name,
                    "media_kind": a.media_kind.value,
                    "size_bytes": a.size_bytes,
                    "location_ref": a.location_ref,
                }
                for a in self.attachments
            ],
            "suggestions": list(self.suggestions),
            "follow_up_questions": list(self.follow_up_questions),
            "metadata": dict(self.metadata),
        }
