"""Web search providers producing RAG candidates."""

from .base import SearchProvider
from .duckduckgo import DuckDuckGoSearchProvider
from .factory import create_search_provider_from_env

__all__ = ["DuckDuckGoSearchProvider", "SearchProvider", "create_search_provider_from_env"]
