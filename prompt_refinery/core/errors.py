"""Error taxonomy for the prompt refinement service.

Every error carries the HTTP status it maps to and a client-facing message.
The API layer translates them into ``{"error": message}`` responses; nothing
here is retried automatically.
"""

from fastapi import status


class PromptRefineryError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict[str, object]:
        """Return the JSON body for this error."""
        return {"error": self.message}


class InvalidInputError(PromptRefineryError):
    """Message empty or too long."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Message is required or too long"


class InvalidStateError(PromptRefineryError):
    """Conversation round outside the known states."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid conversation state"


class UnauthorizedError(PromptRefineryError):
    """Missing or rejected bearer credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized: Invalid token"


class QuotaExceededError(PromptRefineryError):
    """Daily generation quota used up."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, daily_limit: int = 5) -> None:
        super().__init__(
            f"Daily limit reached. You can generate {daily_limit} prompts per day. "
            "Try again tomorrow!"
        )
        self.daily_limit = daily_limit

    def to_body(self) -> dict[str, object]:
        return {"error": self.message, "limitReached": True}


class UpstreamError(PromptRefineryError):
    """Completion service failure (timeout, non-2xx, malformed body)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to fetch response from AI"


class StorageError(UpstreamError):
    """Counter store unavailable."""

    default_message = "Usage storage unavailable"
