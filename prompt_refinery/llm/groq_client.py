"""Groq client over the OpenAI-compatible chat completions API."""

import logging
from typing import Any

import httpx

from prompt_refinery.core.errors import UpstreamError
from prompt_refinery.llm.client import LLMClient
from prompt_refinery.settings import settings

logger = logging.getLogger(__name__)


class GroqClient(LLMClient):
    """Chat completions client for Groq (or any OpenAI-compatible endpoint)."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.groq_api_key
        self.base_url = (base_url or settings.groq_base_url).rstrip("/")
        self.model_name = model or settings.groq_model
        self.timeout = timeout or settings.llm_timeout_seconds
        self._transport = transport

    async def generate(self, prompt: str, context: dict | None = None) -> str:
        """Generate a response with a single non-streaming chat completion."""
        context = context or {}
        payload: dict[str, Any] = {
            "messages": [
                {"role": "system", "content": context.get("system_prompt", settings.llm_system_prompt)},
                {"role": "user", "content": prompt},
            ],
            "model": self.model_name,
            "stream": False,
            "temperature": context.get("temperature", settings.llm_temperature),
        }
        if "max_tokens" in context:
            payload["max_tokens"] = context["max_tokens"]

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException as e:
            logger.error(f"[GROQ] Timeout after {self.timeout}s")
            raise UpstreamError() from e
        except httpx.HTTPStatusError as e:
            logger.error(f"[GROQ] HTTP {e.response.status_code}: {e.response.text[:500]}")
            raise UpstreamError() from e
        except httpx.HTTPError as e:
            logger.error(f"[GROQ] Request failed: {e}")
            raise UpstreamError() from e
        except ValueError as e:
            logger.error(f"[GROQ] Response body is not JSON: {e}")
            raise UpstreamError() from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"[GROQ] Unexpected response shape: {str(data)[:500]}")
            raise UpstreamError() from e

        if not isinstance(content, str) or not content:
            logger.error("[GROQ] Empty completion")
            raise UpstreamError()
        return content
