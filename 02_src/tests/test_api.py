"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from chat_engine.api import create_fastapi_app
from chat_engine.app import Application
from chat_engine.config import EngineConfig
from chat_engine.scheduling import VirtualScheduler


@pytest.fixture
def client():
    application = Application(
        config=EngineConfig(db_path=":memory:", anthropic_api_key=None),
        scheduler=VirtualScheduler(),
    )
    with TestClient(create_fastapi_app(application)) as test_client:
        yield test_client


class TestMessagingRoutes:
    """Tests for /api/messages and /api/transcript."""

    def test_send_message(self, client):
        response = client.post("/api/messages", json={"text": "Show me all players"})

        assert response.status_code == 200
        body = response.json()
        assert body["superseded"] is False
        assert body["message"]["sender"] == "engine"
        assert body["message"]["kind"] == "analysis"
        assert "Current Squad" in body["message"]["content"]

    def test_transcript(self, client):
        client.post("/api/messages", json={"text": "hello"})

        response = client.get("/api/transcript")

        assert response.status_code == 200
        senders = [m["sender"] for m in response.json()]
        assert senders == ["user", "engine"]

    def test_text_required(self, client):
        response = client.post("/api/messages", json={})

        assert response.status_code == 422


class TestSettingsRoutes:
    """Tests for /api/status and /api/settings."""

    def test_status(self, client):
        response = client.get("/api/status")

        assert response.status_code == 200
        body = response.json()
        assert body["team_name"] == "Demo FC"
        assert body["loading"] is False

    def test_update_settings(self, client):
        response = client.put(
            "/api/settings",
            json={"confidence_threshold": 80, "auto_analysis_enabled": False},
        )

        assert response.status_code == 200
        assert response.json()["confidence_threshold"] == 80
        assert response.json()["auto_analysis_enabled"] is False

    def test_threshold_out_of_range(self, client):
        response = client.put("/api/settings", json={"confidence_threshold": 120})

        assert response.status_code == 422


class TestObservabilityRoutes:
    """Tests for /api/trace-events."""

    def test_trace_events_after_message(self, client):
        client.post("/api/messages", json={"text": "hello"})

        response = client.get("/api/trace-events", params={"actor": "dispatch_engine"})

        assert response.status_code == 200
        types = {e["event_type"] for e in response.json()}
        assert "message_received" in types
        assert "message_responded" in types

    def test_invalid_after(self, client):
        response = client.get("/api/trace-events", params={"after": "not-a-date"})

        assert response.status_code == 400
