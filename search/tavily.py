"""Tavily search provider.

Tavily returns ranked results with pre-extracted content. Only title, URL and
a short snippet are kept here: the RAG pipeline fetches and budgets page text
itself so every provider feeds it the same way.
"""

import asyncio
import os

from rag.contracts import SearchResult
from utils.logger import get_logger

from .base import SearchProvider

logger = get_logger(__name__)

MAX_SNIPPET_CHARS = 320


class TavilySearchProvider(SearchProvider):
    name = "tavily"

    def __init__(self, api_key: str | None = None, search_depth: str = "basic"):
        """
        Args:
            api_key: Tavily API key (defaults to TAVILY_API_KEY env var)
            search_depth: "basic" (faster) or "advanced" (deeper)
        """
        self.api_key = api_key or os.getenv("TAVILY_API_KEY")
        if not self.api_key:
            raise ValueError("TAVILY_API_KEY not found in environment")

        # Lazy import so tests don't require tavily unless this provider is selected
        try:
            from tavily import TavilyClient
        except ModuleNotFoundError as e:
            raise ModuleNotFoundError(
                "Optional dependency 'tavily' is not installed. "
                "Install it to enable Tavily search: pip install tavily-python"
            ) from e

        self.client = TavilyClient(api_key=self.api_key)
        self.search_depth = search_depth
        logger.info("Tavily client initialized")

    def _search_sync(self, query: str, max_results: int) -> list[SearchResult]:
        response = self.client.search(
            query=query,
            max_results=max_results,
            search_depth=self.search_depth,
            include_raw_content=False,
            include_answer=False,
        )

        results = []
        for item in response.get("results", []):
            results.append(
                SearchResult(
                    title=(item.get("title") or "").strip(),
                    link=(item.get("url") or "").strip(),
                    snippet=(item.get("content") or "")[:MAX_SNIPPET_CHARS],
                )
            )
        return results

    async def _do_search(self, query: str, max_results: int) -> list[SearchResult]:
        # The SDK is blocking; keep the event loop free
        return await asyncio.to_thread(self._search_sync, query, max_results)
