"""Request and response schemas for the prompt chat API.

Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PromptChatRequest(BaseModel):
    """Inbound user message."""

    # Length and emptiness are checked by the orchestrator
    message: str


class PromptChatResponse(CamelModel):
    """Reply to one conversation turn."""

    reply: str
    is_final_generation: bool
    current_round: int
    remaining_prompts: int


class ResetResponse(CamelModel):
    message: str


class RemainingPromptsResponse(CamelModel):
    remaining: int


class SecretKeyResponse(CamelModel):
    """Identity echo returned by the demonstration endpoint."""

    message: str
    user_email: str | None
    secret_info: str
