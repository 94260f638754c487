"""Factory for the configured search provider."""

import httpx

from config import Config, ConfigError, SearchProviderType
from utils.logger import get_logger

from .base import SearchProvider
from .duckduckgo import DuckDuckGoSearchProvider

logger = get_logger(__name__)


def create_search_provider_from_env(
    config: Config | None = None, client: httpx.AsyncClient | None = None
) -> SearchProvider:
    """
    Create the search provider selected by SEARCH_PROVIDER.

    Environment variables:
        SEARCH_PROVIDER: "duckduckgo" (default) or "tavily"
        TAVILY_API_KEY: required for "tavily"

    Raises:
        ConfigError: on an unknown provider or missing Tavily key
    """
    config = config or Config()

    if config.SEARCH_PROVIDER == SearchProviderType.DUCKDUCKGO.value:
        logger.info("Using DuckDuckGo for web search")
        return DuckDuckGoSearchProvider(client=client)

    if config.SEARCH_PROVIDER == SearchProviderType.TAVILY.value:
        if not config.TAVILY_API_KEY:
            raise ConfigError("TAVILY_API_KEY not set in environment")
        from .tavily import TavilySearchProvider

        logger.info("Using Tavily for web search")
        return TavilySearchProvider(api_key=config.TAVILY_API_KEY)

    raise ConfigError(f"Unknown SEARCH_PROVIDER '{config.SEARCH_PROVIDER}'")
