"""Tests for DispatchEngine."""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from chat_engine.dispatch import FallbackStrategy
from chat_engine.errors import RemoteServiceError
from chat_engine.handlers import APOLOGY
from chat_engine.models import IntentCategory, MessageKind, Sender
from chat_engine.remote import RemoteReply


class TestLocalAnswers:
    """Tests for submissions answered without a remote service."""

    @pytest.mark.asyncio
    async def test_user_message_precedes_answer(self, engine_factory, transcript):
        engine = engine_factory()

        answer = await engine.submit("Show me all players")

        messages = transcript.messages
        assert [m.sender for m in messages] == [Sender.USER, Sender.ENGINE]
        assert messages[0].content == "Show me all players"
        assert messages[1] is answer
        assert messages[0].timestamp <= messages[1].timestamp

    @pytest.mark.asyncio
    async def test_answer_metadata(self, engine_factory):
        engine = engine_factory()

        answer = await engine.submit("Show me all players")

        assert answer.sender == Sender.ENGINE
        assert answer.kind == MessageKind.ANALYSIS
        assert answer.metadata["source"] == "local"
        assert answer.metadata["category"] == "playerManagement"

    @pytest.mark.asyncio
    async def test_repeat_submission_same_answer(self, engine_factory):
        """Test that the same text against the same data answers identically."""
        engine = engine_factory()

        first = await engine.submit("Give me a full team analysis")
        second = await engine.submit("Give me a full team analysis")

        assert first.content == second.content
        assert first.confidence == second.confidence
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_snapshot_change_committed(self, engine_factory, provider):
        """Test that an added player is visible to the next request."""
        engine = engine_factory()

        await engine.submit("Add player John Doe as striker age 22")
        listing = await engine.submit("Show me all players")

        assert len(provider.current.players) == 5
        assert "John Doe (ST)" in listing.content

    @pytest.mark.asyncio
    async def test_no_match_scenario(self, engine_factory, provider, empty_calendar_snapshot):
        provider.commit(empty_calendar_snapshot)
        engine = engine_factory()

        answer = await engine.submit("Predict next match outcome")

        assert answer.kind == MessageKind.INFO
        assert "No upcoming matches" in answer.content

    @pytest.mark.asyncio
    async def test_loading_reported_per_submission(self, engine_factory, loading_events):
        engine = engine_factory()

        await engine.submit("hello")

        assert loading_events == [True, False]
        assert engine.loading is False

    @pytest.mark.asyncio
    async def test_loading_listener_error_ignored(self, engine_factory):
        def broken_listener(value):
            raise RuntimeError("ui gone")

        engine = engine_factory(on_loading=broken_listener)

        answer = await engine.submit("hello")

        assert answer is not None
        assert engine.loading is False

    @pytest.mark.asyncio
    async def test_trace_events(self, engine_factory, storage):
        engine = engine_factory()

        await engine.submit("hello")

        events = await storage.get_trace_events(actor="dispatch_engine")
        types = [e.event_type for e in reversed(events)]
        assert types == ["message_received", "fallback_used", "message_responded"]
        assert events[0].data["source"] == "local"


class TestRemoteAnswers:
    """Tests for the remote path and its fallback."""

    @pytest.mark.asyncio
    async def test_remote_reply_used(self, engine_factory, mock_remote, transcript):
        engine = engine_factory(remote=mock_remote)

        answer = await engine.submit("What should we do?")

        assert answer.content == "Remote answer"
        assert answer.kind == MessageKind.TEXT
        assert answer.confidence == 90
        assert answer.metadata["source"] == "remote"
        assert len(transcript) == 2

        message, context = mock_remote.send_message.await_args.args
        assert message == "What should we do?"
        assert context["userId"] == "test_user"
        assert context["teamSnapshotSummary"]["teamName"] == "Demo FC"

    @pytest.mark.asyncio
    async def test_remote_failure_falls_back(
        self, engine_factory, mock_remote, transcript, loading_events, storage
    ):
        """Test that a rejected remote call yields exactly one local answer."""
        mock_remote.send_message = AsyncMock(side_effect=RemoteServiceError("down"))
        engine = engine_factory(remote=mock_remote)

        answer = await engine.submit("Show me all players")

        engine_messages = [m for m in transcript.messages if m.sender == Sender.ENGINE]
        assert engine_messages == [answer]
        assert answer.metadata["source"] == "local"
        assert "Current Squad" in answer.content
        assert loading_events == [True, False]
        assert engine.loading is False

        failures = await storage.get_trace_events(event_types=["remote_failed"])
        assert failures[0].data["reason"] == "RemoteServiceError"

    @pytest.mark.asyncio
    async def test_low_confidence_reply_falls_back(self, engine_factory, mock_remote, storage):
        mock_remote.send_message = AsyncMock(return_value=RemoteReply("not sure", 40))
        engine = engine_factory(remote=mock_remote)

        answer = await engine.submit("Show me all players")

        assert answer.metadata["source"] == "local"
        failures = await storage.get_trace_events(event_types=["remote_failed"])
        assert failures[0].data["reason"] == "low_confidence"

    @pytest.mark.asyncio
    async def test_remote_timeout_falls_back(self, engine_factory, mock_remote, storage):
        async def slow_reply(message, context):
            await asyncio.sleep(1)
            return RemoteReply("too late", 95)

        mock_remote.send_message = slow_reply
        engine = engine_factory(remote=mock_remote, remote_timeout=0.01)

        answer = await engine.submit("Show me all players")

        assert answer.metadata["source"] == "local"
        failures = await storage.get_trace_events(event_types=["remote_failed"])
        assert failures[0].data["reason"] == "timeout"


class TestLastRequestWins:
    """Tests for overlapping submissions."""

    @pytest.mark.asyncio
    async def test_superseded_answer_discarded(
        self, engine_factory, mock_remote, transcript, loading_events
    ):
        """Test that a slow first answer is dropped once a second request starts."""
        release_first = asyncio.Event()
        started = []

        async def send(message, context):
            started.append(message)
            if message == "first":
                await release_first.wait()
                return RemoteReply("late answer", 90)
            return RemoteReply("fresh answer", 90)

        mock_remote.send_message = send
        engine = engine_factory(remote=mock_remote, tracker=None)

        first = asyncio.create_task(engine.submit("first"))
        while not started:
            await asyncio.sleep(0.001)
        assert engine.loading is True

        second = await engine.submit("second")
        release_first.set()
        first_result = await first

        assert first_result is None
        assert second.content == "fresh answer"
        assert [m.content for m in transcript.messages] == ["first", "second", "fresh answer"]
        assert loading_events == [True, True, False, False]
        assert engine.loading is False


def failing_handler(text, snapshot, confidence, context):
    raise RuntimeError("boom")


class TestFailureContainment:
    """Tests for failures inside the local answer path."""

    @pytest.mark.asyncio
    async def test_handler_failure_answers_with_apology(
        self, engine_factory, classifier, registry, tracker, transcript, loading_events
    ):
        """Test that a raising handler still ends loading and answers once."""
        broken = registry.replace(IntentCategory.TEAM_ANALYSIS, failing_handler)
        engine = engine_factory(fallback=FallbackStrategy(classifier, broken, tracker))

        answer = await engine.submit("Give me a full team analysis")

        assert answer.content == APOLOGY
        assert answer.metadata["apology"] is True
        assert [m.sender for m in transcript.messages] == [Sender.USER, Sender.ENGINE]
        assert loading_events == [True, False]
        assert engine.loading is False

    @pytest.mark.asyncio
    async def test_refresh_during_remote_call_kept(
        self, engine_factory, mock_remote, provider, snapshot
    ):
        """Test that a local change builds on data refreshed while the remote call ran."""

        async def refresh_then_fail(message, context):
            provider.commit(replace(snapshot, team_name="Refreshed FC"))
            raise RemoteServiceError("down")

        mock_remote.send_message = refresh_then_fail
        engine = engine_factory(remote=mock_remote)

        answer = await engine.submit("Add player John Doe as striker age 22")

        assert answer.metadata["source"] == "local"
        assert provider.current.team_name == "Refreshed FC"
        assert len(provider.current.players) == 5
        assert provider.current.players[-1].name == "John Doe"
