"""RAG context endpoint: search (or caller-supplied results) + context assembly."""

from fastapi import APIRouter, Depends, Request

from rag.service import NutritionResearchService
from server.dependencies import get_api_key, get_research_service
from server.schemas.requests import RagRequest
from server.schemas.responses import RagResponseDTO
from server.utils import get_request_id
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["RAG"])


@router.post("/rag", response_model=RagResponseDTO)
async def build_rag_context(
    request: RagRequest,
    http_request: Request,
    api_key: str = Depends(get_api_key),
    research: NutritionResearchService = Depends(get_research_service),
):
    """
    Assemble grounded context for a query.

    An empty ``citations`` list with ``has_grounding=false`` is a normal
    outcome meaning nothing could be retrieved; it is not an error.
    """
    request_id = get_request_id(http_request)
    search_results = (
        [item.to_search_result() for item in request.search_results]
        if request.search_results is not None
        else None
    )

    context = await research.build(
        request.query,
        enable_web_search=True,
        search_results=search_results,
        max_results_to_process=request.max_results_to_process,
    )

    logger.info(
        "RAG request served",
        extra={
            "extra_fields": {
                "request_id": request_id,
                "citations": len(context.citations),
                "supplied_results": search_results is not None,
                "research_error": context.error,
            }
        },
    )
    return RagResponseDTO.from_research_context(request_id, request.query, context)
