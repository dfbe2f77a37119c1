"""Remote AI assistant client using the Anthropic Claude API."""

import json
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Protocol

import anthropic

from ..errors import RateLimitExceeded, RemoteServiceError
from ..logging_config import get_logger
from ..models import RequestContext, TeamDataSnapshot

logger = get_logger(__name__)


@dataclass(frozen=True)
class RemoteReply:
    """Answer from the remote assistant."""

    content: str
    confidence: float
    suggestions: tuple[str, ...] = ()
    follow_up_questions: tuple[str, ...] = ()


def build_remote_context(context: RequestContext, snapshot: TeamDataSnapshot) -> dict[str, Any]:
    """Request context in the remote service's wire format."""
    return {
        "userId": context.user_id,
        "sport": context.sport,
        "teamSnapshotSummary": snapshot.summary(),
        "language": context.language,
        "isPremiumUser": context.is_premium,
    }


class IAssistantService(Protocol):
    """Black-box request/response AI service."""

    async def send_message(self, message: str, context: dict[str, Any]) -> RemoteReply:
        """Answer message. Raises RemoteServiceError on failure."""
        ...


SYSTEM_PROMPT = """You are an assistant for a football team manager.
Answer in the language with code "{language}". The user is {tier}.

Current team data:
{summary}

Reply with a single JSON object and nothing else:
{{"content": "<answer>", "confidence": <0-100>, "suggestions": ["..."], "followUpQuestions": ["..."]}}"""


def _as_strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value)


def parse_reply(text: str, default_confidence: float) -> RemoteReply:
    """Read the JSON reply; anything else is taken as plain content."""
    stripped = text.strip()
    try:
        data = json.loads(stripped)
    except ValueError:
        data = None

    if not isinstance(data, dict) or not isinstance(data.get("content"), str):
        return RemoteReply(content=stripped, confidence=default_confidence)

    try:
        confidence = float(data.get("confidence", default_confidence))
    except (TypeError, ValueError):
        confidence = default_confidence

    return RemoteReply(
        content=data["content"],
        confidence=max(0.0, min(100.0, confidence)),
        suggestions=_as_strings(data.get("suggestions")),
        follow_up_questions=_as_strings(data.get("followUpQuestions")),
    )


class AnthropicAssistantService:
    """Anthropic Claude API assistant."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-3-5-sonnet-20241022",
        default_confidence: float = 80.0,
        max_tokens: int = 1024,
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model
        self._default_confidence = default_confidence
        self._max_tokens = max_tokens
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    async def send_message(self, message: str, context: dict[str, Any]) -> RemoteReply:
        system = SYSTEM_PROMPT.format(
            language=context.get("language", "en"),
            tier="a premium user" if context.get("isPremiumUser") else "on the free plan",
            summary=json.dumps(context.get("teamSnapshotSummary", {}), ensure_ascii=False),
        )
        try:
            response = await self._client.messages.create(
                model=self._model,
                system=system,
                messages=[{"role": "user", "content": message}],
                max_tokens=self._max_tokens,
            )
            text = response.content[0].text
        except Exception as e:
            raise RemoteServiceError(f"Remote AI error: {e}") from e

        return parse_reply(text, self._default_confidence)


@dataclass
class PerformanceStats:
    """Per-user remote call statistics."""

    requests: int = 0
    cache_hits: int = 0
    total_latency: float = 0.0
    total_confidence: float = 0.0

    def record(self, latency: float, confidence: float, cache_hit: bool) -> None:
        self.requests += 1
        self.cache_hits += int(cache_hit)
        self.total_latency += latency
        self.total_confidence += confidence

    def as_dict(self) -> dict[str, float]:
        if not self.requests:
            return {"avg_response_time": 0.0, "avg_confidence": 0.0, "cache_hit_rate": 0.0}
        return {
            "avg_response_time": self.total_latency / self.requests,
            "avg_confidence": self.total_confidence / self.requests,
            "cache_hit_rate": self.cache_hits / self.requests,
        }


@dataclass
class _Window:
    count: int
    reset_at: float


@dataclass
class _CacheEntry:
    reply: RemoteReply
    expires_at: float


class GuardedAssistantService:
    """Rate limiting, response caching and statistics around another service.

    Each user gets a fixed window of max_requests per window_seconds; the
    request over the limit raises RateLimitExceeded. Identical questions for
    the same sport, team and language are answered from cache for
    cache_ttl_seconds.
    """

    def __init__(
        self,
        inner: IAssistantService,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        cache_ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._inner = inner
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._cache_ttl = cache_ttl_seconds
        self._clock = clock

        self._windows: dict[str, _Window] = {}
        self._cache: dict[str, _CacheEntry] = {}
        self._stats: dict[str, PerformanceStats] = {}

    async def send_message(self, message: str, context: dict[str, Any]) -> RemoteReply:
        user_id = str(context.get("userId", "anonymous"))
        started = self._clock()

        self._check_rate_limit(user_id, started)

        key = self._cache_key(message, context)
        cached = self._cache.get(key)
        if cached and cached.expires_at > started:
            logger.debug(f"Cache hit for {user_id}")
            self._record(user_id, started, cached.reply.confidence, cache_hit=True)
            return cached.reply

        reply = await self._inner.send_message(message, context)

        now = self._clock()
        self._cache[key] = _CacheEntry(reply=reply, expires_at=now + self._cache_ttl)
        self._evict_expired(now)
        self._record(user_id, started, reply.confidence, cache_hit=False)
        return reply

    def performance_stats(self, user_id: str) -> dict[str, float] | None:
        stats = self._stats.get(user_id)
        return stats.as_dict() if stats else None

    def _check_rate_limit(self, user_id: str, now: float) -> None:
        window = self._windows.get(user_id)
        if window is None or now >= window.reset_at:
            self._windows[user_id] = _Window(count=1, reset_at=now + self._window_seconds)
            return
        if window.count >= self._max_requests:
            raise RateLimitExceeded(user_id, window.reset_at - now)
        window.count += 1

    @staticmethod
    def _cache_key(message: str, context: dict[str, Any]) -> str:
        normalized = " ".join(message.lower().split())
        summary = context.get("teamSnapshotSummary") or {}
        return "|".join(
            [
                normalized,
                str(context.get("sport", "")),
                str(summary.get("teamName", "")),
                str(context.get("language", "")),
            ]
        )

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, entry in self._cache.items() if entry.expires_at <= now]
        for key in expired:
            del self._cache[key]

    def _record(self, user_id: str, started: float, confidence: float, cache_hit: bool) -> None:
        stats = self._stats.setdefault(user_id, PerformanceStats())
        stats.record(self._clock() - started, confidence, cache_hit)
