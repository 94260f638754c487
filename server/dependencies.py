"""FastAPI dependencies for authentication, research and LLM access."""

import os

from fastapi import Header, HTTPException, Request, status

from server.utils import get_request_id, redact_sensitive_headers
from utils.logger import get_logger

logger = get_logger(__name__)


async def get_api_key(request: Request, x_api_key: str | None = Header(None)):
    """Validate API key from X-API-Key header."""
    valid_keys_str = os.getenv("API_KEYS", "")
    request_id = get_request_id(request)
    redacted_headers = redact_sensitive_headers(dict(request.headers))

    if not valid_keys_str:
        logger.error(
            "API authentication not configured",
            extra={"extra_fields": {"request_id": request_id, "headers": redacted_headers}},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="API authentication not configured",
        )

    valid_keys = [k.strip() for k in valid_keys_str.split(",") if k.strip()]

    if not x_api_key or x_api_key not in valid_keys:
        logger.warning(
            "API authentication failed",
            extra={"extra_fields": {"request_id": request_id, "headers": redacted_headers}},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API key"
        )

    return x_api_key


def get_research_service(request: Request):
    """Research service created during application startup."""
    service = getattr(request.app.state, "research_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Web research is not configured",
        )
    return service


def get_llm_client():
    """Dependency to get the Gemini client (singleton pattern)."""
    if not hasattr(get_llm_client, "_instance"):
        from api.google_gemini_client import GeminiClient
        from config import Config

        config = Config()
        if not config.GOOGLE_GEMINI_API_KEY:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Language model is not configured",
            )
        get_llm_client._instance = GeminiClient(
            api_key=config.GOOGLE_GEMINI_API_KEY, model_name=config.DEFAULT_GEMINI_MODEL
        )
    return get_llm_client._instance


def get_optional_research_service(request: Request):
    """Like get_research_service, but None when research is unavailable."""
    return getattr(request.app.state, "research_service", None)
