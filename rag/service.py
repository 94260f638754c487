"""Search + RAG research service used by the HTTP routes."""

from collections.abc import Sequence

from search.base import SearchProvider
from utils.logger import get_logger

from .assembler import ContextAssembler
from .contracts import ResearchContext, SearchResult

logger = get_logger(__name__)

DEFAULT_SEARCH_RESULTS = 5


class NutritionResearchService:
    """
    Runs a web search for the user's question and assembles RAG context from
    the hits.

    ``build`` NEVER raises: provider or pipeline failures come back as a
    ResearchContext with ``used=False`` and ``error`` set.
    """

    def __init__(
        self,
        assembler: ContextAssembler,
        search_provider: SearchProvider | None,
        search_max_results: int = DEFAULT_SEARCH_RESULTS,
    ):
        self.assembler = assembler
        self.search_provider = search_provider
        self.search_max_results = search_max_results

    async def build(
        self,
        query: str,
        enable_web_search: bool = True,
        search_results: Sequence[SearchResult] | None = None,
        max_results_to_process: int | None = None,
    ) -> ResearchContext:
        """
        Args:
            query: User question used for both search and the context header
            enable_web_search: When False nothing is searched or fetched
            search_results: Pre-computed candidates; skips the search provider
            max_results_to_process: Per-call override of the fetch budget
        """
        if not enable_web_search:
            return ResearchContext(used=False, search_query=query, error="disabled")

        try:
            if search_results is None:
                if self.search_provider is None:
                    logger.warning("Web search requested but no search provider is configured")
                    return ResearchContext(used=False, search_query=query, error="no_search_provider")
                search_results = await self.search_provider.search(query, self.search_max_results)

            if search_results:
                logger.info(f"Performing RAG with {len(search_results)} search results.")
                error = "no_grounding"
            else:
                # Empty input still yields the header-only context
                logger.info(f'No search results found for "{query}", nothing to fetch.')
                error = "no_search_results"
            rag_result = await self.assembler.perform_rag(query, search_results, max_results_to_process)

            return ResearchContext(
                used=rag_result.has_grounding,
                rag=rag_result,
                search_query=query,
                search_result_count=len(search_results),
                error=None if rag_result.has_grounding else error,
            )

        except Exception as e:
            logger.error(f"Research failed: {e}", exc_info=True)
            return ResearchContext(used=False, search_query=query, error=str(e))
