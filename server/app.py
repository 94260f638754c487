"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Config, ConfigError
from rag.factory import create_research_service_from_env
from server.middleware import RequestIDMiddleware
from server.routes import ask, health, retrieval
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared HTTP client and research service; close them on shutdown."""
    logger.info("FastAPI server starting up")
    config = Config()

    for problem in config.validate():
        logger.warning(problem)

    client = httpx.AsyncClient(follow_redirects=True)
    try:
        app.state.research_service = create_research_service_from_env(client=client, config=config)
    except (ConfigError, ValueError, ModuleNotFoundError) as e:
        logger.error(f"Web research disabled: {e}")
        app.state.research_service = None

    yield

    await client.aclose()
    logger.info("FastAPI server shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="NutriCare RAG API",
        description="Web-grounded nutrition and food-safety answers",
        version=health.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(retrieval.router)
    app.include_router(ask.router)

    return app
