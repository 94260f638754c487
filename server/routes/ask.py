"""Ask endpoint: optional web grounding + Gemini answer."""

import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.base_client import BaseAIClient, LLMUnavailableError
from rag.contracts import ResearchContext
from rag.prompt import build_grounded_prompt
from rag.service import NutritionResearchService
from rag.settings import MAX_QUERY_LENGTH
from server.dependencies import get_api_key, get_llm_client, get_optional_research_service
from server.schemas.requests import AskRequest
from server.schemas.responses import AskResponseDTO, CitationDTO
from server.utils import clamp_max_tokens, get_request_id
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Ask"])


async def _research_if_enabled(
    research: NutritionResearchService | None, request: AskRequest
) -> ResearchContext | None:
    if not request.enable_web_search:
        return None
    query = request.prompt.strip()[:MAX_QUERY_LENGTH]
    if research is None:
        logger.warning("Web search requested but research service is not configured")
        return ResearchContext(used=False, search_query=query, error="research_unavailable")
    return await research.build(query, enable_web_search=True)


def _complete(llm: BaseAIClient, prompt: str, **kwargs) -> str:
    text, usage = llm.get_completion(prompt, **kwargs)
    if not text:
        raise LLMUnavailableError("Language model returned no text")
    logger.debug("LLM usage", extra={"extra_fields": {"usage": usage}})
    return text


@router.post("/ask", response_model=AskResponseDTO)
async def ask(
    request: AskRequest,
    http_request: Request,
    api_key: str = Depends(get_api_key),
    llm: BaseAIClient = Depends(get_llm_client),
    research_service: NutritionResearchService | None = Depends(get_optional_research_service),
):
    """Answer a nutrition question, grounding it in web sources when requested."""
    request_id = get_request_id(http_request)

    research = await _research_if_enabled(research_service, request)
    rag_result = research.rag if research else None
    prompt = build_grounded_prompt(request.prompt, rag_result)

    kwargs = {}
    if request.temperature is not None:
        kwargs["temperature"] = request.temperature
    if request.max_tokens is not None:
        kwargs["max_output_tokens"] = clamp_max_tokens(request.max_tokens)

    try:
        text = await asyncio.to_thread(_complete, llm, prompt, **kwargs)
    except LLMUnavailableError as e:
        logger.warning(
            "LLM completion failed",
            extra={"extra_fields": {"request_id": request_id, "error": str(e)}},
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="Language model did not return an answer"
        ) from e

    return AskResponseDTO(
        request_id=request_id,
        text=text,
        model=getattr(llm, "model_name", None) or "unknown",
        citations=[CitationDTO.from_citation(c) for c in (research.citations if research else [])],
        research_used=bool(research and research.used),
        research_error=research.error if research else None,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
