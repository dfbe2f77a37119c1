"""Pytest configuration and fixtures."""

import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from chat_engine.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from chat_engine.tracker import Tracker

    return Tracker(storage)


@pytest.fixture
def snapshot():
    """Default four-player snapshot."""
    from chat_engine.data import default_snapshot

    return default_snapshot()


@pytest.fixture
def empty_calendar_snapshot(snapshot):
    """Snapshot with no upcoming matches and no stored predictions."""
    return replace(snapshot, upcoming_matches=(), predictions=())


@pytest.fixture
def context():
    """Request context with a fixed date."""
    from chat_engine.models import RequestContext

    return RequestContext(user_id="test_user", today=date(2024, 3, 1))


@pytest.fixture
def classifier():
    from chat_engine.classifier import IntentClassifier

    return IntentClassifier()


@pytest.fixture
def registry():
    from chat_engine.handlers import HandlerRegistry

    return HandlerRegistry()


@pytest.fixture
def fallback(classifier, registry, tracker):
    from chat_engine.dispatch import FallbackStrategy

    return FallbackStrategy(classifier, registry, tracker)


@pytest.fixture
def transcript():
    from chat_engine.transcript import Transcript

    return Transcript()


@pytest.fixture
def provider(snapshot, tracker):
    """Snapshot provider without a source, serving the default snapshot."""
    from chat_engine.data import SnapshotProvider

    return SnapshotProvider(tracker=tracker, initial=snapshot)


@pytest.fixture
def mock_remote():
    """Create mock remote assistant service."""
    from chat_engine.remote import RemoteReply

    remote = Mock()
    remote.send_message = AsyncMock(
        return_value=RemoteReply(content="Remote answer", confidence=90)
    )
    return remote


@pytest.fixture
def loading_events():
    """Collects loading transitions reported by the engine."""
    return []


@pytest.fixture
def engine_factory(transcript, fallback, provider, tracker, context, loading_events):
    """Build a DispatchEngine; keyword arguments override the defaults."""
    from chat_engine.dispatch import DispatchEngine

    def build(**kwargs):
        options = {
            "transcript": transcript,
            "fallback": fallback,
            "snapshots": provider,
            "context": context,
            "tracker": tracker,
            "on_loading": loading_events.append,
            "today": lambda: context.today,
        }
        options.update(kwargs)
        return DispatchEngine(**options)

    return build
