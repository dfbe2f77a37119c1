"""Transcript: ordered, append-only log of user and engine messages."""

from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger
from ..models import Message

logger = get_logger(__name__)

TranscriptListener = Callable[[Message], Awaitable[None]]


class ITranscriptSink(Protocol):
    """Write-only boundary the engine appends messages to."""

    async def append(self, message: Message) -> None:
        """Append message. Messages are never edited or removed."""
        ...


class Transcript:
    """In-memory transcript shown to the user."""

    def __init__(self):
        self._messages: list[Message] = []
        self._ids: set[str] = set()
        self._listeners: list[TranscriptListener] = []

    async def append(self, message: Message) -> None:
        if message.id in self._ids:
            raise ValueError(f"Message {message.id} already in transcript")

        self._messages.append(message)
        self._ids.add(message.id)

        for listener in list(self._listeners):
            try:
                await listener(message)
            except Exception as e:
                logger.error(f"Transcript listener error: {e}", exc_info=True)

    def subscribe(self, listener: TranscriptListener) -> None:
        """Register async callback invoked after each append."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: TranscriptListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def messages(self) -> list[Message]:
        """Copy of all messages in append order."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
