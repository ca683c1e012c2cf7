"""Completion gateway between the round orchestrator and the LLM client."""

import logging
import time

from prompt_refinery.core.errors import UpstreamError
from prompt_refinery.llm.client import LLMClient

logger = logging.getLogger(__name__)


class CompletionGateway:
    """Sends one instruction to the completion service and returns its text."""

    def __init__(self, client: LLMClient, context: dict | None = None) -> None:
        """Initialize gateway with LLM client and default generation parameters."""
        self.client = client
        self.context = context

    async def complete(self, instruction: str) -> str:
        """Run a completion for ``instruction``.

        Raises:
            UpstreamError: On any failure of the completion call, including
                an empty reply
        """
        start_time = time.time()
        try:
            reply = await self.client.generate(instruction, self.context)
        except UpstreamError:
            raise
        except Exception as e:
            logger.error(f"Completion call failed: {e}", exc_info=True)
            raise UpstreamError() from e

        if not reply:
            raise UpstreamError()

        latency_ms = (time.time() - start_time) * 1000
        logger.info(f"Completion received - latency_ms={latency_ms:.2f}, chars={len(reply)}")
        return reply
