"""Search provider interface feeding the RAG pipeline."""

import time
from abc import ABC, abstractmethod

from rag.contracts import SearchResult
from utils.logger import get_logger

logger = get_logger(__name__)


class SearchProvider(ABC):
    """
    Base class for web search providers.

    Subclasses implement ``_do_search``; ``search`` wraps it so callers never
    see an exception, only an empty list.
    """

    name: str = "search"

    @abstractmethod
    async def _do_search(self, query: str, max_results: int) -> list[SearchResult]:
        """Execute the provider-specific search."""

    async def search(self, query: str, max_results: int = 5) -> list[SearchResult]:
        logger.info(f'[Search:{self.name}] Searching for: "{query}" (max {max_results} results)')
        start_time = time.monotonic()
        try:
            results = await self._do_search(query, max_results)
        except Exception as e:
            logger.error(
                f"[Search:{self.name}] Error during search: {e}",
                extra={"extra_fields": {"provider": self.name, "error_type": type(e).__name__}},
            )
            return []

        # Ensure basic data exists and respect the limit
        results = [r for r in results if r.link and r.title][:max_results]
        logger.info(
            f"[Search:{self.name}] Found {len(results)} results "
            f"in {time.monotonic() - start_time:.2f}s"
        )
        return results
