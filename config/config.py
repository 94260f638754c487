import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from rag.assembler import context_header
from rag.settings import DEFAULT_USER_AGENT, MAX_QUERY_LENGTH, RAGSettings


class SearchProviderType(Enum):
    """Supported web search providers."""
    DUCKDUCKGO = "duckduckgo"
    TAVILY = "tavily"


class ConfigError(ValueError):
    """Raised when an environment value cannot be used."""


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


class Config:
    """Configuration management for the application."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # RAG budget
        self.RAG_MAX_CONTEXT_LENGTH = _env_int('RAG_MAX_CONTEXT_LENGTH', 4000)
        self.RAG_MAX_SNIPPET_LENGTH = _env_int('RAG_MAX_SNIPPET_LENGTH', 500)
        self.RAG_FETCH_TIMEOUT_MS = _env_int('RAG_FETCH_TIMEOUT_MS', 5000)
        self.RAG_MAX_RESULTS_TO_PROCESS = _env_int('RAG_MAX_RESULTS_TO_PROCESS', 3)
        self.RAG_USER_AGENT = os.getenv('RAG_USER_AGENT', DEFAULT_USER_AGENT)

        # Search
        self.SEARCH_PROVIDER = os.getenv('SEARCH_PROVIDER', SearchProviderType.DUCKDUCKGO.value).lower()
        self.SEARCH_MAX_RESULTS = _env_int('SEARCH_MAX_RESULTS', 5)
        self.TAVILY_API_KEY = os.getenv('TAVILY_API_KEY')

        # LLM
        self.GOOGLE_GEMINI_API_KEY = os.getenv('GOOGLE_GEMINI_API_KEY')
        self.DEFAULT_GEMINI_MODEL = os.getenv('DEFAULT_GEMINI_MODEL', 'gemini-2.0-flash')

        # API auth
        self.API_KEYS = [k.strip() for k in os.getenv('API_KEYS', '').split(',') if k.strip()]

    def rag_settings(self) -> RAGSettings:
        """
        Build the immutable RAG settings from the environment values.

        Raises:
            ConfigError: if a value is out of range, or the context budget
                cannot hold the header for a query of MAX_QUERY_LENGTH
        """
        try:
            settings = RAGSettings(
                max_context_length=self.RAG_MAX_CONTEXT_LENGTH,
                max_snippet_length=self.RAG_MAX_SNIPPET_LENGTH,
                fetch_timeout_s=self.RAG_FETCH_TIMEOUT_MS / 1000,
                max_results_to_process=self.RAG_MAX_RESULTS_TO_PROCESS,
                user_agent=self.RAG_USER_AGENT,
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e

        min_length = len(context_header("x" * MAX_QUERY_LENGTH))
        if settings.max_context_length < min_length:
            raise ConfigError(
                f"RAG_MAX_CONTEXT_LENGTH must be at least {min_length} to fit the "
                f"context header for a {MAX_QUERY_LENGTH}-character query"
            )
        return settings

    def validate(self) -> list[str]:
        """
        Check that the configured features have what they need.

        Returns:
            list[str]: Human-readable problems (empty when configuration is valid)
        """
        problems = []
        valid_providers = [e.value for e in SearchProviderType]
        if self.SEARCH_PROVIDER not in valid_providers:
            problems.append(
                f"Unknown SEARCH_PROVIDER '{self.SEARCH_PROVIDER}'. Must be one of: {', '.join(valid_providers)}"
            )
        elif self.SEARCH_PROVIDER == SearchProviderType.TAVILY.value and not self.TAVILY_API_KEY:
            problems.append("TAVILY_API_KEY is not set but SEARCH_PROVIDER is 'tavily'.")

        if not self.GOOGLE_GEMINI_API_KEY:
            problems.append("GOOGLE_GEMINI_API_KEY is not set; /v1/ask will be unavailable.")
        if not self.API_KEYS:
            problems.append("API_KEYS is not set; /v1 endpoints will reject every request.")

        return problems
