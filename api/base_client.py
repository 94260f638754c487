from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple


class LLMUnavailableError(RuntimeError):
    """Raised when no usable answer can be obtained from the language model."""


class BaseAIClient(ABC):
    """
    Abstract base class for LLM clients that answer grounded prompts.
    """

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        """
        Args:
            api_key: API key for the AI service
            **kwargs: Additional model-specific parameters
        """
        self.api_key = api_key
        self.model_name = kwargs.get('model_name')

    @abstractmethod
    def get_completion(self, prompt: str, **kwargs) -> Tuple[Optional[str], Optional[Dict[str, int]]]:
        """
        Get a completion from the AI model.

        Returns:
            A tuple containing:
                - The generated text response (None on failure)
                - A dictionary with token usage information (or None if not available)
        """

    def get_token_usage(self, response: Any) -> Optional[Dict[str, int]]:
        """
        Extract token usage information from the API response.
        Subclasses override this when the provider reports usage.
        """
        return None
