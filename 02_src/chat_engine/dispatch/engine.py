"""DispatchEngine implementation."""

import asyncio
from dataclasses import replace
from datetime import date
from typing import Callable, Protocol

from ..data import SnapshotProvider
from ..logging_config import get_logger
from ..models import Attachment, Message, MessageKind, RequestContext, Response, TeamDataSnapshot
from ..remote import IAssistantService, build_remote_context
from ..tracker import ITracker
from ..transcript import ITranscriptSink
from .fallback import FallbackStrategy

logger = get_logger(__name__)

LoadingListener = Callable[[bool], None]


class CancellationToken:
    """Marks a submission whose answer is no longer wanted."""

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class IDispatchEngine(Protocol):
    """Turns user text into transcript messages."""

    async def submit(
        self, text: str, attachments: tuple[Attachment, ...] = ()
    ) -> Message | None:
        """Append the user Message, answer it, append the engine Message and return it.

        Returns None when a newer submission superseded this one.
        """
        ...

    @property
    def loading(self) -> bool:
        ...


class DispatchEngine:
    """Orchestrates remote call, local fallback and transcript writes.

    Overlapping submissions follow "last request wins": starting a submission
    cancels the one in flight, whose late answer is discarded.
    """

    def __init__(
        self,
        transcript: ITranscriptSink,
        fallback: FallbackStrategy,
        snapshots: SnapshotProvider,
        context: RequestContext | None = None,
        remote: IAssistantService | None = None,
        tracker: ITracker | None = None,
        remote_timeout: float = 15.0,
        remote_min_confidence: float = 50.0,
        on_loading: LoadingListener | None = None,
        today: Callable[[], date] = date.today,
    ):
        self._transcript = transcript
        self._fallback = fallback
        self._snapshots = snapshots
        self._context = context or RequestContext()
        self._remote = remote
        self._tracker = tracker
        self._remote_timeout = remote_timeout
        self._remote_min_confidence = remote_min_confidence
        self._on_loading = on_loading
        self._today = today

        self._in_flight = 0
        self._latest: CancellationToken | None = None

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    async def submit(
        self, text: str, attachments: tuple[Attachment, ...] = ()
    ) -> Message | None:
        user_message = Message.from_user(text, attachments)
        await self._transcript.append(user_message)
        await self._track(
            "message_received",
            {"user_id": self._context.user_id, "message_id": user_message.id, "text": text},
        )

        if self._latest is not None:
            self._latest.cancel()
        token = CancellationToken()
        self._latest = token

        self._set_loading(+1)
        try:
            snapshot = self._snapshots.current
            context = replace(self._context, today=self._today())
            response = await self._respond(text, snapshot, context)

            if token.cancelled:
                logger.info(f"Discarding superseded response to: {text[:50]}")
                await self._track(
                    "response_discarded",
                    {"user_id": context.user_id, "message_id": user_message.id},
                )
                return None

            if response.snapshot is not None:
                self._snapshots.commit(response.snapshot)

            message = response.to_message()
            await self._transcript.append(message)
            await self._track(
                "message_responded",
                {
                    "user_id": context.user_id,
                    "message_id": message.id,
                    "kind": message.kind.value,
                    "confidence": message.confidence,
                    "source": message.metadata.get("source", "local"),
                },
            )
            return message
        finally:
            if self._latest is token:
                self._latest = None
            self._set_loading(-1)

    async def _respond(
        self, text: str, snapshot: TeamDataSnapshot, context: RequestContext
    ) -> Response:
        if self._remote is not None:
            reply = None
            try:
                reply = await asyncio.wait_for(
                    self._remote.send_message(text, build_remote_context(context, snapshot)),
                    timeout=self._remote_timeout,
                )
            except asyncio.TimeoutError:
                logger.warning(f"Remote service timed out after {self._remote_timeout}s")
                await self._track("remote_failed", {"reason": "timeout"})
            except Exception as e:
                logger.warning(f"Remote service failed: {e}")
                await self._track(
                    "remote_failed", {"reason": type(e).__name__, "error": str(e)}
                )

            if reply is not None:
                if reply.confidence >= self._remote_min_confidence:
                    return Response(
                        content=reply.content,
                        kind=MessageKind.TEXT,
                        confidence=reply.confidence,
                        suggestions=reply.suggestions,
                        follow_up_questions=reply.follow_up_questions,
                        metadata={"source": "remote"},
                    )
                logger.info(
                    f"Remote confidence {reply.confidence} below {self._remote_min_confidence}"
                )
                await self._track(
                    "remote_failed",
                    {"reason": "low_confidence", "confidence": reply.confidence},
                )

        await self._track("fallback_used", {"user_id": context.user_id})
        # A refresh may have landed during the remote call; handlers build on
        # the latest snapshot so their copy-on-write result does not undo it.
        response = await self._fallback.respond(text, self._snapshots.current, context)
        return replace(response, metadata={**response.metadata, "source": "local"})

    def _set_loading(self, delta: int) -> None:
        # Each submission reports its own start and end.
        self._in_flight += delta
        if self._on_loading is None:
            return
        try:
            self._on_loading(delta > 0)
        except Exception as e:
            logger.error(f"Loading listener error: {e}", exc_info=True)

    async def _track(self, event_type: str, data: dict) -> None:
        if self._tracker:
            await self._tracker.track(event_type=event_type, actor="dispatch_engine", data=data)
