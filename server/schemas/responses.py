"""Pydantic response models (DTOs) for FastAPI endpoints."""

from pydantic import BaseModel, Field

from rag.contracts import Citation, ResearchContext


class CitationDTO(BaseModel):
    source: str
    url: str
    title: str

    @classmethod
    def from_citation(cls, citation: Citation):
        return cls(source=citation.source, url=citation.url, title=citation.title)


class RagResponseDTO(BaseModel):
    request_id: str
    query: str
    context: str
    citations: list[CitationDTO] = Field(default_factory=list)
    has_grounding: bool
    search_result_count: int = 0
    error: str | None = None

    @classmethod
    def from_research_context(cls, request_id: str, query: str, research: ResearchContext):
        """Convert ResearchContext to DTO."""
        rag = research.rag
        return cls(
            request_id=request_id,
            query=query,
            context=rag.context if rag else "",
            citations=[CitationDTO.from_citation(c) for c in research.citations],
            has_grounding=bool(rag and rag.has_grounding),
            search_result_count=research.search_result_count,
            error=research.error,
        )


class AskResponseDTO(BaseModel):
    request_id: str
    text: str
    model: str
    citations: list[CitationDTO] = Field(default_factory=list)
    research_used: bool = False
    research_error: str | None = None
    timestamp: str


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
