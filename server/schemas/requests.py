"""Pydantic request models for FastAPI endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field

from rag.contracts import SearchResult
from rag.settings import MAX_QUERY_LENGTH


class SearchResultItem(BaseModel):
    title: str
    link: str
    snippet: str = ""

    def to_search_result(self) -> SearchResult:
        return SearchResult(title=self.title, link=self.link, snippet=self.snippet)


class RagRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=MAX_QUERY_LENGTH)
    search_results: Optional[List[SearchResultItem]] = Field(None, max_length=20)
    max_results_to_process: Optional[int] = Field(None, ge=1, le=10)


class AskRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=2000)
    enable_web_search: bool = False
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, gt=0)
