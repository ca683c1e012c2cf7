"""Pytest configuration and fixtures."""

import pytest

from prompt_refinery.core.errors import UpstreamError
from prompt_refinery.domain.services.round_orchestrator import RoundOrchestrator
from prompt_refinery.domain.services.usage_limiter import UsageLimiter
from prompt_refinery.llm.client import LLMClient
from prompt_refinery.llm.gateway import CompletionGateway
from prompt_refinery.persistence.conversation_store import InMemoryConversationStore
from prompt_refinery.persistence.usage_store import InMemoryUsageStore

TODAY = "2026-10-18"
YESTERDAY = "2026-10-17"


class ScriptedLLMClient(LLMClient):
    """LLM client returning numbered replies and recording every prompt."""

    def __init__(self) -> None:
        self.prompts: list[str] = []
        self.fail_next = False

    async def generate(self, prompt: str, context: dict | None = None) -> str:
        if self.fail_next:
            self.fail_next = False
            raise UpstreamError()
        self.prompts.append(prompt)
        return f"reply {len(self.prompts)}"


class Clock:
    """Settable calendar day for the usage limiter."""

    def __init__(self, day: str = TODAY) -> None:
        self.day = day

    def __call__(self) -> str:
        return self.day


@pytest.fixture
def llm_client():
    return ScriptedLLMClient()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def conversation_store():
    return InMemoryConversationStore()


@pytest.fixture
def usage_store():
    return InMemoryUsageStore()


@pytest.fixture
def limiter(usage_store, clock):
    return UsageLimiter(usage_store, daily_limit=5, today=clock)


@pytest.fixture
def orchestrator(conversation_store, limiter, llm_client):
    return RoundOrchestrator(conversation_store, limiter, CompletionGateway(llm_client))


@pytest.fixture
def client(orchestrator):
    """Create a test FastAPI client with in-memory collaborators."""
    from fastapi.testclient import TestClient

    from prompt_refinery.api.deps import get_orchestrator, get_verifier
    from prompt_refinery.core.auth import JWTIdentityVerifier
    from prompt_refinery.main import app

    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_verifier] = lambda: JWTIdentityVerifier()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Bearer headers for a JWT issued to user-1."""
    from prompt_refinery.core.auth import create_access_token

    token = create_access_token({"sub": "user-1", "email": "user1@example.com"})
    return {"Authorization": f"Bearer {token}"}
