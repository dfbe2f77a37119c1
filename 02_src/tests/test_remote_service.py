"""Tests for remote assistant services."""

import json
from unittest.mock import AsyncMock, Mock, patch

import pytest

from chat_engine.errors import RateLimitExceeded, RemoteServiceError
from chat_engine.models import RequestContext
from chat_engine.remote import (
    AnthropicAssistantService,
    GuardedAssistantService,
    RemoteReply,
    build_remote_context,
    parse_reply,
)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_context(user_id="coach", team_name="Demo FC", language="en"):
    return {
        "userId": user_id,
        "sport": "soccer",
        "teamSnapshotSummary": {"teamName": team_name},
        "language": language,
        "isPremiumUser": False,
    }


def api_response(text: str) -> Mock:
    response = Mock()
    response.content = [Mock(text=text)]
    return response


class TestBuildRemoteContext:
    """Tests for build_remote_context."""

    def test_wire_keys(self, snapshot):
        context = RequestContext(user_id="u1", language="es", is_premium=True)

        data = build_remote_context(context, snapshot)

        assert data["userId"] == "u1"
        assert data["sport"] == "soccer"
        assert data["language"] == "es"
        assert data["isPremiumUser"] is True
        assert data["teamSnapshotSummary"]["teamName"] == "Demo FC"


class TestParseReply:
    """Tests for parse_reply."""

    def test_json_reply(self):
        text = json.dumps(
            {
                "content": "Play 4-4-2",
                "confidence": 72,
                "suggestions": ["Show formation"],
                "followUpQuestions": ["Who starts?"],
            }
        )

        reply = parse_reply(text, 80)

        assert reply == RemoteReply("Play 4-4-2", 72.0, ("Show formation",), ("Who starts?",))

    def test_plain_text_uses_default_confidence(self):
        reply = parse_reply("  Just rest the squad.  ", 80)

        assert reply.content == "Just rest the squad."
        assert reply.confidence == 80

    def test_confidence_clamped(self):
        assert parse_reply('{"content": "x", "confidence": 250}', 80).confidence == 100
        assert parse_reply('{"content": "x", "confidence": "high"}', 80).confidence == 80


class TestAnthropicAssistantService:
    """Tests for the Anthropic client wrapper."""

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(ValueError):
            AnthropicAssistantService()

    @pytest.mark.asyncio
    async def test_send_message(self):
        with patch("chat_engine.remote.service.anthropic.AsyncAnthropic") as mock_client_class:
            mock_client = Mock()
            mock_client.messages.create = AsyncMock(
                return_value=api_response('{"content": "Rotate Silva", "confidence": 91}')
            )
            mock_client_class.return_value = mock_client

            service = AnthropicAssistantService(api_key="test-key", model="test-model")
            reply = await service.send_message("Who should rest?", make_context())

        assert reply.content == "Rotate Silva"
        assert reply.confidence == 91

        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["messages"] == [{"role": "user", "content": "Who should rest?"}]
        assert "Demo FC" in kwargs["system"]

    @pytest.mark.asyncio
    async def test_api_error_wrapped(self):
        """Test that client failures surface as RemoteServiceError."""
        with patch("chat_engine.remote.service.anthropic.AsyncAnthropic") as mock_client_class:
            mock_client = Mock()
            mock_client.messages.create = AsyncMock(side_effect=Exception("API down"))
            mock_client_class.return_value = mock_client

            service = AnthropicAssistantService(api_key="test-key")

            with pytest.raises(RemoteServiceError) as exc_info:
                await service.send_message("Hello", make_context())

        assert "API down" in str(exc_info.value)


class TestGuardedAssistantService:
    """Tests for rate limiting, caching and statistics."""

    @pytest.fixture
    def inner(self):
        inner = Mock()
        inner.send_message = AsyncMock(return_value=RemoteReply("answer", 88))
        return inner

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.mark.asyncio
    async def test_rate_limit(self, inner, clock):
        service = GuardedAssistantService(inner, max_requests=2, window_seconds=60, clock=clock)

        await service.send_message("one", make_context())
        await service.send_message("two", make_context())
        with pytest.raises(RateLimitExceeded) as exc_info:
            await service.send_message("three", make_context())

        assert exc_info.value.user_id == "coach"
        assert exc_info.value.retry_after == 60

    @pytest.mark.asyncio
    async def test_rate_limit_window_resets(self, inner, clock):
        service = GuardedAssistantService(inner, max_requests=1, window_seconds=60, clock=clock)

        await service.send_message("one", make_context())
        clock.now += 60
        await service.send_message("two", make_context())

        assert inner.send_message.await_count == 2

    @pytest.mark.asyncio
    async def test_rate_limit_is_per_user(self, inner, clock):
        service = GuardedAssistantService(inner, max_requests=1, clock=clock)

        await service.send_message("one", make_context(user_id="a"))
        await service.send_message("two", make_context(user_id="b"))

        assert inner.send_message.await_count == 2
        with pytest.raises(RateLimitExceeded):
            await service.send_message("three", make_context(user_id="a"))

    @pytest.mark.asyncio
    async def test_cached_reply_shared_across_users(self, inner, clock):
        """Test that the cache key ignores the user, so another user gets the same reply."""
        service = GuardedAssistantService(inner, clock=clock)

        first = await service.send_message("one", make_context(user_id="a"))
        second = await service.send_message("one", make_context(user_id="b"))

        assert second is first
        assert inner.send_message.await_count == 1
        assert service.performance_stats("b")["cache_hit_rate"] == 1.0

    @pytest.mark.asyncio
    async def test_cache_hit_on_normalized_message(self, inner, clock):
        """Test that case and spacing differences share a cache entry."""
        service = GuardedAssistantService(inner, clock=clock)

        first = await service.send_message("Who  should start?", make_context())
        second = await service.send_message("who should START?", make_context())

        assert first is second
        assert inner.send_message.await_count == 1

    @pytest.mark.asyncio
    async def test_cache_key_includes_team_and_language(self, inner, clock):
        service = GuardedAssistantService(inner, clock=clock)

        await service.send_message("hello", make_context())
        await service.send_message("hello", make_context(team_name="Other FC"))
        await service.send_message("hello", make_context(language="es"))

        assert inner.send_message.await_count == 3

    @pytest.mark.asyncio
    async def test_cache_expires(self, inner, clock):
        service = GuardedAssistantService(inner, cache_ttl_seconds=300, clock=clock)

        await service.send_message("hello", make_context())
        clock.now += 301
        await service.send_message("hello", make_context())

        assert inner.send_message.await_count == 2

    @pytest.mark.asyncio
    async def test_inner_failure_propagates(self, inner, clock):
        inner.send_message = AsyncMock(side_effect=RemoteServiceError("down"))
        service = GuardedAssistantService(inner, clock=clock)

        with pytest.raises(RemoteServiceError):
            await service.send_message("hello", make_context())

    @pytest.mark.asyncio
    async def test_performance_stats(self, inner, clock):
        service = GuardedAssistantService(inner, clock=clock)

        assert service.performance_stats("coach") is None

        await service.send_message("hello", make_context())
        await service.send_message("hello", make_context())

        stats = service.performance_stats("coach")
        assert stats["avg_confidence"] == 88
        assert stats["cache_hit_rate"] == 0.5
        assert stats["avg_response_time"] == 0
