"""Process-wide registry of in-flight conversations.

Conversations live only as long as the process: a restart drops every
conversation in progress and the affected users start again at round 1.
"""

from abc import ABC, abstractmethod

from prompt_refinery.domain.models.conversation import Conversation


class ConversationStore(ABC):
    """Conversation state keyed by user id."""

    @abstractmethod
    async def get(self, user_id: str) -> Conversation | None:
        """Get the conversation of a user, if any."""

    @abstractmethod
    async def get_or_create(self, user_id: str) -> Conversation:
        """Get the conversation of a user, starting a new one at round 1 if absent."""

    @abstractmethod
    async def save(self, user_id: str, conversation: Conversation) -> None:
        """Store ``conversation`` as the user's current conversation."""

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Drop the user's conversation.

        Returns:
            True if a conversation existed
        """


class InMemoryConversationStore(ConversationStore):
    """Dict-backed conversation store."""

    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}

    async def get(self, user_id: str) -> Conversation | None:
        return self._conversations.get(user_id)

    async def get_or_create(self, user_id: str) -> Conversation:
        conversation = self._conversations.get(user_id)
        if conversation is None:
            conversation = Conversation()
            self._conversations[user_id] = conversation
        return conversation

    async def save(self, user_id: str, conversation: Conversation) -> None:
        self._conversations[user_id] = conversation

    async def delete(self, user_id: str) -> bool:
        return self._conversations.pop(user_id, None) is not None

    def __len__(self) -> int:
        return len(self._conversations)
