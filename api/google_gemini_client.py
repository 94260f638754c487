from typing import Any, Dict, Optional, Tuple

from google import genai

from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


class GeminiClient(BaseAIClient):
    """
    A client for the Google Gemini API (google.genai package).
    Used to answer prompts that embed RAG context.
    """

    def __init__(self, api_key: str, model_name: str = "gemini-2.0-flash", **kwargs):
        """
        Args:
            api_key: The Google Gemini API key
            model_name: The name of the model to use
        """
        super().__init__(api_key, **kwargs)

        if not api_key:
            raise ValueError("API key is required for Gemini")

        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name

    def get_completion(self, prompt: str, **kwargs) -> Tuple[Optional[str], Optional[Dict[str, int]]]:
        """
        Get a completion from the Gemini API.

        Args:
            prompt: The grounded prompt
            **kwargs:
                - model: Override the default model for this call
                - temperature: Controls randomness (0.0 to 1.0)
                - max_output_tokens: Maximum number of tokens to generate

        Returns:
            (response_text, usage_dict); (None, None) when the call fails
        """
        model_name = kwargs.get('model', self.model_name)
        temperature = kwargs.get('temperature', 0.4)
        max_output_tokens = kwargs.get('max_output_tokens', 1024)

        try:
            response = self.client.models.generate_content(
                model=model_name,
                contents=prompt,
                config={
                    'temperature': temperature,
                    'max_output_tokens': max_output_tokens,
                }
            )
        except Exception as e:
            logger.error(
                f"Error getting completion from Gemini: {e}",
                extra={"extra_fields": {"model": model_name, "error_type": type(e).__name__}},
            )
            return None, None

        text = getattr(response, 'text', None)
        return text, self.get_token_usage(response)

    def get_token_usage(self, response: Any) -> Optional[Dict[str, int]]:
        usage_metadata = getattr(response, 'usage_metadata', None)
        if usage_metadata is None:
            return None
        return {
            'prompt_tokens': getattr(usage_metadata, 'prompt_token_count', 0) or 0,
            'completion_tokens': getattr(usage_metadata, 'candidates_token_count', 0) or 0,
            'total_tokens': getattr(usage_metadata, 'total_token_count', 0) or 0,
        }
