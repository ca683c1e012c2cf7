"""Domain models."""

from prompt_refinery.domain.models.conversation import (
    Conversation,
    LimitStatus,
    TurnResult,
    UsageRecord,
)

__all__ = ["Conversation", "LimitStatus", "TurnResult", "UsageRecord"]
