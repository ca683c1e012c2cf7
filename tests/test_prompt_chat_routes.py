"""Tests for the prompt chat HTTP API."""

import asyncio
import logging
from unittest.mock import AsyncMock

from prompt_refinery.core.auth import create_access_token
from prompt_refinery.core.errors import StorageError
from prompt_refinery.domain.models.conversation import Conversation, UsageRecord
from prompt_refinery.main import app, lifespan
from prompt_refinery.settings import settings

from conftest import TODAY


def headers_for(uid: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': uid})}"}


class TestAuthentication:
    """Tests for bearer authentication on protected routes."""

    def test_missing_header(self, client):
        """Test that requests without a token get 401."""
        response = client.post("/api/prompt-chat", json={"message": "hi"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized: No token provided"}

    def test_non_bearer_header(self, client):
        """Test that a non-Bearer scheme is treated as missing."""
        response = client.get("/api/remaining-prompts", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized: No token provided"}

    def test_invalid_token(self, client):
        """Test that a rejected token gets 401."""
        response = client.post(
            "/api/reset-conversation", headers={"Authorization": "Bearer nope"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized: Invalid token"}

    def test_health_is_public(self, client):
        """Test that the health check needs no token."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestPromptChat:
    """Tests for POST /api/prompt-chat."""

    def test_first_message(self, client, auth_headers):
        """Test the camelCase reply to the first turn."""
        response = client.post(
            "/api/prompt-chat",
            json={"message": "I need a prompt for a marketing email"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "reply": "reply 1",
            "isFinalGeneration": False,
            "currentRound": 2,
            "remainingPrompts": 5,
        }
        assert response.headers["X-Request-ID"]

    def test_full_conversation(self, client, auth_headers):
        """Test request, answers and an early generate over HTTP."""
        for message in ["I need a prompt for a marketing email", "ChatGPT, customers"]:
            assert client.post(
                "/api/prompt-chat", json={"message": message}, headers=auth_headers
            ).status_code == 200

        response = client.post("/api/prompt-chat", json={"message": "generate"}, headers=auth_headers)

        body = response.json()
        assert body["isFinalGeneration"] is True
        assert body["currentRound"] == 3
        assert body["remainingPrompts"] == 4

    def test_too_long_message(self, client, auth_headers, conversation_store):
        """Test that 7001 characters are refused with 400 and no state."""
        response = client.post(
            "/api/prompt-chat", json={"message": "x" * 7001}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required or too long"}
        assert len(conversation_store) == 0

    def test_empty_message(self, client, auth_headers):
        """Test that an empty message is refused."""
        response = client.post("/api/prompt-chat", json={"message": ""}, headers=auth_headers)

        assert response.status_code == 400

    def test_missing_message_field(self, client, auth_headers):
        """Test that a body without a message is refused with 400."""
        response = client.post("/api/prompt-chat", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required or too long"}

    def test_quota_exceeded(self, client, auth_headers, usage_store):
        """Test the 429 body when the daily limit is reached."""
        asyncio.run(usage_store.put("user-1", UsageRecord(date=TODAY, count=5)))
        client.post("/api/prompt-chat", json={"message": "request"}, headers=auth_headers)

        response = client.post("/api/prompt-chat", json={"message": "make it"}, headers=auth_headers)

        assert response.status_code == 429
        body = response.json()
        assert body["limitReached"] is True
        assert "5 prompts per day" in body["error"]

    def test_upstream_failure(self, client, auth_headers, llm_client, conversation_store):
        """Test that completion failures answer 500 and store nothing."""
        llm_client.fail_next = True

        response = client.post("/api/prompt-chat", json={"message": "request"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch response from AI"}
        assert len(conversation_store) == 0

    def test_invalid_state(self, client, auth_headers, conversation_store):
        """Test that a desynchronized round answers 400."""
        asyncio.run(conversation_store.save("user-1", Conversation(round=9)))

        response = client.post("/api/prompt-chat", json={"message": "hi"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid conversation state"}

    def test_users_have_separate_conversations(self, client, auth_headers):
        """Test that conversations are keyed by the verified user id."""
        client.post("/api/prompt-chat", json={"message": "request"}, headers=auth_headers)

        response = client.post(
            "/api/prompt-chat", json={"message": "request"}, headers=headers_for("user-2")
        )

        assert response.json()["currentRound"] == 2


class TestOtherRoutes:
    """Tests for reset, remaining prompts and the identity echo."""

    def test_reset_conversation(self, client, auth_headers):
        """Test that after a reset the next message is round 1 again."""
        client.post("/api/prompt-chat", json={"message": "request"}, headers=auth_headers)
        client.post("/api/prompt-chat", json={"message": "answers"}, headers=auth_headers)

        response = client.post("/api/reset-conversation", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Conversation reset successfully"}

        next_turn = client.post(
            "/api/prompt-chat", json={"message": "new request"}, headers=auth_headers
        )
        assert next_turn.json()["currentRound"] == 2

    def test_remaining_prompts(self, client, auth_headers, usage_store):
        """Test the remaining quota endpoint."""
        asyncio.run(usage_store.put("user-1", UsageRecord(date=TODAY, count=2)))

        response = client.get("/api/remaining-prompts", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"remaining": 3}

    def test_remaining_prompts_storage_failure(self, client, auth_headers, usage_store):
        """Test that a usage store outage answers 500."""
        usage_store.get = AsyncMock(side_effect=StorageError())

        response = client.get("/api/remaining-prompts", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "Usage storage unavailable"}

    def test_get_secret_key(self, client, auth_headers):
        """Test that the identity echo returns the verified email."""
        response = client.get("/api/get-secret-key", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Access Granted",
            "userEmail": "user1@example.com",
            "secretInfo": "This data is secure.",
        }

    def test_request_id_is_echoed(self, client, auth_headers):
        """Test that a caller-supplied request id comes back."""
        response = client.get(
            "/api/remaining-prompts", headers={**auth_headers, "X-Request-ID": "abc123"}
        )

        assert response.headers["X-Request-ID"] == "abc123"


async def run_lifespan() -> None:
    async with lifespan(app):
        pass


class TestStartup:
    """Tests for the application lifespan."""

    def test_production_without_redis_warns(self, monkeypatch, caplog):
        """Test that in-memory usage counters are flagged in production."""
        monkeypatch.setattr(settings, "environment", "production")
        monkeypatch.setattr(settings, "redis_enabled", False)

        with caplog.at_level(logging.WARNING, logger="prompt_refinery.main"):
            asyncio.run(run_lifespan())

        assert any("Redis disabled in production" in r.getMessage() for r in caplog.records)

    def test_development_without_redis_is_quiet(self, monkeypatch, caplog):
        """Test that development runs do not warn about in-memory counters."""
        monkeypatch.setattr(settings, "environment", "development")
        monkeypatch.setattr(settings, "redis_enabled", False)

        with caplog.at_level(logging.WARNING, logger="prompt_refinery.main"):
            asyncio.run(run_lifespan())

        assert not any("Redis disabled" in r.getMessage() for r in caplog.records)
