"""Wire the research service from environment configuration."""

import httpx

from config import Config
from search.factory import create_search_provider_from_env
from utils.logger import get_logger

from .assembler import ContextAssembler
from .fetcher import ContentFetcher
from .service import NutritionResearchService

logger = get_logger(__name__)


def create_research_service_from_env(
    client: httpx.AsyncClient | None = None, config: Config | None = None
) -> NutritionResearchService:
    """
    Build a NutritionResearchService from environment variables.

    Args:
        client: Shared HTTP client for page fetches and DuckDuckGo queries
        config: Pre-loaded configuration (read from the environment if omitted)

    Raises:
        ConfigError: if RAG or search settings are invalid
    """
    config = config or Config()
    settings = config.rag_settings()

    fetcher = ContentFetcher(settings=settings, client=client)
    assembler = ContextAssembler(settings=settings, fetcher=fetcher)
    provider = create_search_provider_from_env(config=config, client=client)

    logger.info(
        "Research service configured",
        extra={
            "extra_fields": {
                "search_provider": provider.name,
                "max_context_length": settings.max_context_length,
                "max_results_to_process": settings.max_results_to_process,
            }
        },
    )
    return NutritionResearchService(
        assembler=assembler,
        search_provider=provider,
        search_max_results=config.SEARCH_MAX_RESULTS,
    )


async def perform_rag(query, search_results, max_results_to_process: int = 3):
    """
    One-shot RAG with environment settings and a throwaway HTTP client.

    Long-running callers should build a ContextAssembler once and reuse it.
    """
    settings = Config().rag_settings()
    async with ContentFetcher(settings=settings) as fetcher:
        assembler = ContextAssembler(settings=settings, fetcher=fetcher)
        return await assembler.perform_rag(query, search_results, max_results_to_process)
