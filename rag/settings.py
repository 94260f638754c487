"""Immutable tuning knobs for the RAG pipeline."""

from dataclasses import dataclass

from .domains import DEFAULT_SOURCE_RULES, SourceRule

DEFAULT_USER_AGENT = "NutriCareBot/1.0 (+https://nutricare.app/bot-info)"

# Longest query accepted from API callers; it is echoed verbatim in the context header
MAX_QUERY_LENGTH = 500


@dataclass(frozen=True)
class RAGSettings:
    """
    Configuration handed to the fetcher and assembler at construction.

    Attributes:
        max_context_length: Character budget for the assembled context
        max_snippet_length: Characters kept from each fetched page
        fetch_timeout_s: Wall-clock limit for a single page fetch
        max_results_to_process: Successful fetches per call (default 3)
        min_partial_segment: Remaining capacity required to add a truncated segment
        user_agent: Client-identifying header sent with every fetch
        source_rules: Ordered (domain substring -> label) table
    """

    max_context_length: int = 4000
    max_snippet_length: int = 500
    fetch_timeout_s: float = 5.0
    max_results_to_process: int = 3
    min_partial_segment: int = 100
    user_agent: str = DEFAULT_USER_AGENT
    source_rules: tuple[SourceRule, ...] = DEFAULT_SOURCE_RULES

    def __post_init__(self):
        if self.max_context_length <= 0:
            raise ValueError("max_context_length must be positive")
        if self.max_snippet_length <= 0:
            raise ValueError("max_snippet_length must be positive")
        if self.fetch_timeout_s <= 0:
            raise ValueError("fetch_timeout_s must be positive")
