"""Gemini client implementation."""

import logging
from typing import Any

from google import genai
from google.genai import types

from prompt_refinery.core.errors import UpstreamError
from prompt_refinery.llm.client import LLMClient
from prompt_refinery.settings import settings

logger = logging.getLogger(__name__)


class GeminiClient(LLMClient):
    """Gemini client using the google-genai SDK."""

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        """Initialize Gemini client."""
        self.client = genai.Client(
            api_key=api_key or settings.gemini_api_key,
            http_options=types.HttpOptions(
                api_version="v1beta",
                timeout=int(settings.llm_timeout_seconds * 1000),
            ),
        )
        self.model_name = model or settings.gemini_model

    async def generate(self, prompt: str, context: dict | None = None) -> str:
        """Generate a response using Gemini.

        Args:
            prompt: The prompt to send to the LLM
            context: Optional context dictionary (temperature, max_tokens, system_prompt)

        Returns:
            The generated response text

        Raises:
            UpstreamError: If generation fails or returns no text
        """
        context = context or {}
        generation_config: dict[str, Any] = {
            "temperature": context.get("temperature", settings.llm_temperature),
            "system_instruction": context.get("system_prompt", settings.llm_system_prompt),
        }
        if "max_tokens" in context:
            generation_config["max_output_tokens"] = context["max_tokens"]

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(**generation_config),
            )
        except Exception as e:
            logger.error(f"[GEMINI] Generation failed: {e}")
            raise UpstreamError() from e

        if not response.text:
            logger.error("[GEMINI] Empty completion")
            raise UpstreamError()
        return response.text
