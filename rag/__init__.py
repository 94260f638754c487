"""Retrieval-augmented context assembly for NutriCare."""

from .assembler import ContextAssembler
from .contracts import Citation, RAGResult, ResearchContext, SearchResult
from .domains import DEFAULT_SOURCE_RULES, DomainClassifier, SourceRule, get_domain_name, get_source_name
from .fetcher import ContentFetcher
from .settings import RAGSettings

__all__ = [
    "DEFAULT_SOURCE_RULES",
    "Citation",
    "ContentFetcher",
    "ContextAssembler",
    "DomainClassifier",
    "RAGResult",
    "RAGSettings",
    "ResearchContext",
    "SearchResult",
    "SourceRule",
    "get_domain_name",
    "get_source_name",
]
