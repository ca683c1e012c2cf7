"""Factory to create LLM clients based on a mode string or setting."""

from prompt_refinery.llm.client import LLMClient
from prompt_refinery.settings import settings


def get_llm_client(mode: str | None = None) -> LLMClient:
    """Return an LLMClient instance for the requested mode.

    Priority: explicit ``mode`` argument -> ``LLM_MODE`` setting (default 'groq')
    """
    selected = (mode or settings.llm_mode or "groq").lower()

    if selected in ("groq", "openai-compatible"):
        from prompt_refinery.llm.groq_client import GroqClient

        return GroqClient()

    if selected in ("gemini", "google", "googleai"):
        from prompt_refinery.llm.gemini_client import GeminiClient

        return GeminiClient()

    raise ValueError(f"Unsupported LLM mode: {selected}")
