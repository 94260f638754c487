"""
Retrieval-augmented context assembly.

Ranks search candidates by source authority, fetches them one at a time and
packs their text into a character-bounded context block with a parallel
citation list. The block is embedded verbatim into the LLM prompt.
"""

from collections.abc import Sequence
from typing import Protocol

from utils.logger import get_logger

from .contracts import Citation, RAGResult, SearchResult
from .domains import DomainClassifier
from .settings import RAGSettings

logger = get_logger(__name__)

ELLIPSIS_MARKER = "...\n"


class TextFetcher(Protocol):
    async def fetch_and_extract_text(self, url: str) -> str | None: ...


def context_header(query: str) -> str:
    return f'Information related to "{query}":\n\n'


def format_segment(source_name: str, result: SearchResult, snippet: str) -> str:
    return (
        f"Source: {source_name} ({result.title})\n"
        f"URL: {result.link}\n"
        f"Content Snippet:\n{snippet}\n\n---\n\n"
    )


class ContextAssembler:
    """Builds a bounded RAGResult from unranked search results."""

    def __init__(
        self,
        settings: RAGSettings,
        fetcher: TextFetcher,
        classifier: DomainClassifier | None = None,
    ):
        self.settings = settings
        self.fetcher = fetcher
        self.classifier = classifier or DomainClassifier(settings.source_rules)

    async def perform_rag(
        self,
        query: str,
        search_results: Sequence[SearchResult],
        max_results_to_process: int | None = None,
    ) -> RAGResult:
        """
        Fetch, rank and budget web content for ``query``.

        Candidates are processed strictly in sequence. A candidate with an
        unparseable link or no extractable text is skipped without using up
        the fetch budget. The loop stops once ``max_results_to_process``
        sources were added or the context budget is exhausted.

        Args:
            query: Original user query, echoed in the context header
            search_results: Candidates from a search provider
            max_results_to_process: Successful fetches allowed (defaults to settings)

        Returns:
            RAGResult; ``citations`` is empty when nothing could be grounded
        """
        limit = (
            self.settings.max_results_to_process
            if max_results_to_process is None
            else max_results_to_process
        )
        max_length = self.settings.max_context_length

        logger.info(f'[RAG] Starting RAG process for query: "{query}"')
        citations: list[Citation] = []
        context = context_header(query)

        processed_count = 0
        for result in self.classifier.prioritize(search_results):
            if processed_count >= limit:
                break
            if len(context) >= max_length:
                break

            domain = self.classifier.domain_of(result.link)
            if not domain:
                logger.warning(f"[RAG] Skipping invalid URL: {result.link}")
                continue

            logger.info(f"[RAG] Processing result: {result.title} ({result.link})")
            extracted_text = await self.fetcher.fetch_and_extract_text(result.link)
            if not extracted_text:
                continue

            processed_count += 1
            source_name = self.classifier.source_name(domain)
            snippet = extracted_text[: self.settings.max_snippet_length]
            segment = format_segment(source_name, result, snippet)

            if len(context) + len(segment) <= max_length:
                context += segment
                citations.append(Citation(source=source_name, url=result.link, title=result.title))
                continue

            remaining = max_length - len(context)
            if remaining > self.settings.min_partial_segment:
                context += segment[: remaining - len(ELLIPSIS_MARKER)] + ELLIPSIS_MARKER
                citations.append(Citation(source=source_name, url=result.link, title=result.title))
            logger.warning("[RAG] Context length limit reached. Stopping context addition.")
            break

        if not citations:
            logger.warning(f'[RAG] No content could be fetched or extracted for query: "{query}"')

        logger.info(
            f"[RAG] Finished RAG process. Context length: {len(context)}, Citations: {len(citations)}",
            extra={"extra_fields": {"processed_count": processed_count, "limit": limit}},
        )
        return RAGResult(context=context.strip(), citations=citations)
