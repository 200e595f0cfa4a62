"""LLM package for outreach copy generation."""

from linkreach.llm.client import LLMClient, LLMRequest, LLMResponse

__all__ = ["LLMClient", "LLMRequest", "LLMResponse"]
