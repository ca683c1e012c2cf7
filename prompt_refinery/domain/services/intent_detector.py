"""Detection of the "generate now" request in user messages."""

# Case-insensitive substrings that ask to skip the remaining question rounds.
GENERATE_TRIGGERS = ("generate", "make it")


def wants_generate(message: str) -> bool:
    """Return True if the user asks for the final prompt right away."""
    message_lower = message.lower()
    return any(trigger in message_lower for trigger in GENERATE_TRIGGERS)
