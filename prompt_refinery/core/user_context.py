"""User context for tagging log records with the authenticated user."""

from contextvars import ContextVar
from typing import Optional

# Context variable for user_id
user_id_var: ContextVar[Optional[str]] = ContextVar("user_id", default=None)


def set_user_context(user_id: str | None) -> None:
    """Set the current user context.

    Args:
        user_id: Verified user identifier
    """
    user_id_var.set(user_id)


def get_user_context() -> str | None:
    """Get the current user context.

    Returns:
        Current user identifier or None
    """
    return user_id_var.get()
