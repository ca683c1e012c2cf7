"""FastAPI dependencies for auth and service wiring."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from prompt_refinery.core.auth import Identity, IdentityVerifier, get_identity_verifier
from prompt_refinery.core.errors import UnauthorizedError
from prompt_refinery.core.user_context import set_user_context
from prompt_refinery.domain.services.round_orchestrator import RoundOrchestrator
from prompt_refinery.domain.services.usage_limiter import UsageLimiter
from prompt_refinery.infrastructure.redis import redis_client
from prompt_refinery.llm import CompletionGateway, get_llm_client
from prompt_refinery.persistence.conversation_store import (
    ConversationStore,
    InMemoryConversationStore,
)
from prompt_refinery.persistence.usage_store import (
    InMemoryUsageStore,
    RedisUsageStore,
    UsageStore,
)
from prompt_refinery.settings import settings

# auto_error=False so a missing header gets our own 401 body instead of a 403
security = HTTPBearer(auto_error=False)


@lru_cache
def get_verifier() -> IdentityVerifier:
    """Identity verifier for the configured auth provider."""
    return get_identity_verifier()


@lru_cache
def get_conversation_store() -> ConversationStore:
    """Process-wide conversation store."""
    return InMemoryConversationStore()


@lru_cache
def get_usage_store() -> UsageStore:
    """Usage counter store: Redis when enabled, process memory otherwise."""
    if settings.redis_enabled:
        return RedisUsageStore(redis_client)
    return InMemoryUsageStore()


@lru_cache
def get_usage_limiter() -> UsageLimiter:
    return UsageLimiter(get_usage_store(), daily_limit=settings.daily_generation_limit)


@lru_cache
def get_completion_gateway() -> CompletionGateway:
    return CompletionGateway(get_llm_client())


@lru_cache
def get_orchestrator() -> RoundOrchestrator:
    """Round orchestrator shared by all requests.

    The orchestrator owns the per-user locks, so one instance serves the
    whole process.
    """
    return RoundOrchestrator(
        get_conversation_store(),
        get_usage_limiter(),
        get_completion_gateway(),
        max_message_length=settings.max_message_length,
    )


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    verifier: Annotated[IdentityVerifier, Depends(get_verifier)],
) -> Identity:
    """Get the caller's verified identity from the bearer token.

    Raises:
        UnauthorizedError: If the header is missing or the token is rejected
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Unauthorized: No token provided")

    identity = await verifier.verify(credentials.credentials)
    set_user_context(identity.uid)
    return identity
