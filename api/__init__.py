"""LLM clients."""

from .base_client import BaseAIClient, LLMUnavailableError

__all__ = ["BaseAIClient", "LLMUnavailableError"]
