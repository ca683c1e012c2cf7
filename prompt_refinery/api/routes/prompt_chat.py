"""Prompt refinement chat routes."""

import logging
import time
from typing import Annotated

from fastapi import APIRouter, Depends

from prompt_refinery.api.deps import get_current_identity, get_orchestrator
from prompt_refinery.api.schemas.prompt_chat import (
    PromptChatRequest,
    PromptChatResponse,
    RemainingPromptsResponse,
    ResetResponse,
    SecretKeyResponse,
)
from prompt_refinery.core.auth import Identity
from prompt_refinery.domain.services.round_orchestrator import RoundOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/prompt-chat", response_model=PromptChatResponse)
async def prompt_chat(
    chat_request: PromptChatRequest,
    identity: Annotated[Identity, Depends(get_current_identity)],
    orchestrator: Annotated[RoundOrchestrator, Depends(get_orchestrator)],
) -> PromptChatResponse:
    """Advance the caller's refinement conversation by one turn.

    Errors are raised as PromptRefineryError subclasses and turned into
    ``{"error": ...}`` responses by the application's exception handler.
    """
    start_time = time.time()

    result = await orchestrator.handle_message(identity.uid, chat_request.message)

    latency_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Prompt chat processed - round={result.current_round}, "
        f"final={result.is_final_generation}, remaining={result.remaining_prompts}, "
        f"latency_ms={latency_ms:.2f}"
    )

    return PromptChatResponse(
        reply=result.reply,
        is_final_generation=result.is_final_generation,
        current_round=result.current_round,
        remaining_prompts=result.remaining_prompts,
    )


@router.post("/reset-conversation", response_model=ResetResponse)
async def reset_conversation(
    identity: Annotated[Identity, Depends(get_current_identity)],
    orchestrator: Annotated[RoundOrchestrator, Depends(get_orchestrator)],
) -> ResetResponse:
    """Drop the caller's conversation."""
    await orchestrator.reset(identity.uid)
    return ResetResponse(message="Conversation reset successfully")


@router.get("/remaining-prompts", response_model=RemainingPromptsResponse)
async def remaining_prompts(
    identity: Annotated[Identity, Depends(get_current_identity)],
    orchestrator: Annotated[RoundOrchestrator, Depends(get_orchestrator)],
) -> RemainingPromptsResponse:
    """Final generations the caller has left today."""
    remaining = await orchestrator.remaining_prompts(identity.uid)
    return RemainingPromptsResponse(remaining=remaining)


@router.get("/get-secret-key", response_model=SecretKeyResponse)
async def get_secret_key(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> SecretKeyResponse:
    """Demonstration endpoint echoing the verified identity."""
    logger.info(f"User verified: {identity.email}")
    return SecretKeyResponse(
        message="Access Granted",
        user_email=identity.email,
        secret_info="This data is secure.",
    )
