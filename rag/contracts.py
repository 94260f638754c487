"""Data contracts for the RAG context-assembly pipeline."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SearchResult:
    """A single web search hit supplied by a search provider."""

    title: str
    link: str
    snippet: str = ""


@dataclass(frozen=True)
class Citation:
    """Source record for one appended context segment."""

    source: str  # e.g. "WHO", "UK FSA", or the upper-cased host label
    url: str
    title: str


@dataclass
class RAGResult:
    """Bounded context text plus the citations backing it, in append order."""

    context: str
    citations: list[Citation] = field(default_factory=list)

    @property
    def has_grounding(self) -> bool:
        return bool(self.citations)


@dataclass
class ResearchContext:
    """Outcome of a search + RAG pass, ready for prompt construction."""

    used: bool
    rag: RAGResult | None = None
    search_query: str = ""
    search_result_count: int = 0
    error: str | None = None

    @property
    def citations(self) -> list[Citation]:
        return self.rag.citations if self.rag else []
