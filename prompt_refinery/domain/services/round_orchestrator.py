"""Round orchestration for prompt refinement conversations.

A conversation moves through up to three question rounds before the final
generation:

    round 1  initial request            -> 3 discovery questions
    round 2  answers to round 1         -> 2 follow-up questions, or final
    round 3  answers to round 2         -> 2 precision questions, or final
    round 4  answers to round 3         -> final

In rounds 2 and 3 the user can skip ahead by asking to generate (see
``intent_detector.wants_generate``). A final generation is subject to the
daily quota; once it succeeds the usage counter is incremented and the
conversation is dropped.

Each turn works on a copy of the stored conversation and only writes it back
after the completion call succeeded, so a failed call leaves the stored state
as it was and the user can simply resend the message. The one exception is a
quota rejection: the answer sent with the rejected turn is kept so the user can
retry from the same round.
"""

import logging

from prompt_refinery.core.errors import InvalidInputError, InvalidStateError, QuotaExceededError
from prompt_refinery.core.keyed_lock import KeyedLock
from prompt_refinery.domain.models.conversation import FINAL_ROUND, Conversation, TurnResult
from prompt_refinery.domain.prompts import TemplateId, build_history_log, render_template
from prompt_refinery.domain.services.intent_detector import wants_generate
from prompt_refinery.domain.services.usage_limiter import UsageLimiter
from prompt_refinery.llm.gateway import CompletionGateway
from prompt_refinery.persistence.conversation_store import ConversationStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_MESSAGE_LENGTH = 7000

# Question template asked when a round completes without generating.
QUESTION_TEMPLATES = {
    1: TemplateId.ROUND_1,
    2: TemplateId.ROUND_2,
    3: TemplateId.ROUND_3,
}


class RoundOrchestrator:
    """Advances conversations and produces each turn's reply."""

    def __init__(
        self,
        store: ConversationStore,
        limiter: UsageLimiter,
        gateway: CompletionGateway,
        max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH,
    ) -> None:
        self.store = store
        self.limiter = limiter
        self.gateway = gateway
        self.max_message_length = max_message_length
        self._locks = KeyedLock()

    async def handle_message(self, user_id: str, message: str) -> TurnResult:
        """Process one user message.

        Args:
            user_id: Verified user identifier
            message: Raw user message

        Returns:
            TurnResult with the assistant reply and conversation status

        Raises:
            InvalidInputError: Message empty or longer than the maximum
            InvalidStateError: Stored round outside 1..4
            QuotaExceededError: Final generation requested with no quota left
            UpstreamError: Completion call failed (nothing was saved)
            StorageError: Usage store unavailable
        """
        self._validate_message(message)

        async with self._locks.hold(user_id):
            stored = await self.store.get(user_id)
            # A new conversation is only stored once a save below succeeds
            conversation = stored.copy() if stored is not None else Conversation()
            round_number = conversation.round

            is_final = self._record_message(conversation, message)

            if is_final:
                limit = await self.limiter.check_limit(user_id)
                if not limit.allowed:
                    await self.store.save(user_id, conversation)
                    logger.warning(
                        "Final generation refused: daily limit reached",
                        extra={"user_id": user_id, "round": round_number},
                    )
                    raise QuotaExceededError(self.limiter.daily_limit)
                template_id = TemplateId.GENERATE
            else:
                template_id = QUESTION_TEMPLATES[round_number]

            instruction = render_template(template_id, self._template_values(conversation))
            reply = await self.gateway.complete(instruction)

            if is_final:
                await self.limiter.increment_usage(user_id)
                await self.store.delete(user_id)
            else:
                conversation.questions[round_number] = reply
                conversation.round = round_number + 1
                await self.store.save(user_id, conversation)

            limit = await self.limiter.check_limit(user_id)

        logger.info(
            "Conversation turn completed",
            extra={
                "user_id": user_id,
                "round": round_number,
                "template": template_id.value,
                "is_final_generation": is_final,
            },
        )
        return TurnResult(
            reply=reply,
            is_final_generation=is_final,
            current_round=conversation.round,
            remaining_prompts=limit.remaining,
        )

    async def reset(self, user_id: str) -> None:
        """Drop the user's conversation; the next message starts at round 1."""
        async with self._locks.hold(user_id):
            existed = await self.store.delete(user_id)
        logger.info("Conversation reset", extra={"user_id": user_id, "existed": existed})

    async def remaining_prompts(self, user_id: str) -> int:
        """Final generations the user has left today."""
        limit = await self.limiter.check_limit(user_id)
        return limit.remaining

    def _validate_message(self, message: str) -> None:
        if not isinstance(message, str) or not message:
            raise InvalidInputError()
        if len(message) > self.max_message_length:
            raise InvalidInputError()

    @staticmethod
    def _record_message(conversation: Conversation, message: str) -> bool:
        """Store the message in the slot of the current round.

        Returns:
            True if this turn is a final generation
        """
        round_number = conversation.round

        if round_number == 1:
            conversation.initial_request = message
            return False

        if round_number in (2, 3):
            conversation.answers[round_number - 1] = message
            return wants_generate(message)

        if round_number == FINAL_ROUND:
            conversation.answers[3] = message
            return True

        raise InvalidStateError()

    @staticmethod
    def _template_values(conversation: Conversation) -> dict[str, str]:
        return {
            "user_context": conversation.initial_request,
            "initial_context": conversation.initial_request,
            "round1_questions": conversation.questions.get(1, ""),
            "round1_answers": conversation.answers.get(1, ""),
            "history_log": build_history_log(conversation),
        }
