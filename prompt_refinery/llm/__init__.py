"""LLM abstraction layer."""

from prompt_refinery.llm.client import LLMClient
from prompt_refinery.llm.factory import get_llm_client
from prompt_refinery.llm.gateway import CompletionGateway

__all__ = ["LLMClient", "CompletionGateway", "get_llm_client"]
