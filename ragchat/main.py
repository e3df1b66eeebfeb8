"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, uvicorn, ragchat.api, ragchat.observability, ragchat.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ragchat.api import api_router
from ragchat.api.deps import get_service_cache
from ragchat.configs import get_settings
from ragchat.observability.logger import configure_logging
from ragchat.observability.middleware import (
    CORRELATION_HEADER,
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup creates the schema and warms the service cache; shutdown
    releases the vector store and the connection pool.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    cache = get_service_cache()
    logger.info(
        "Starting RAG chat API",
        extra={"environment": settings.environment, "store_type": settings.rag.store_type},
    )
    await cache.startup()

    yield

    await cache.shutdown()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title="RAG Chat API",
        description="Retrieval-augmented chat over uploaded documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    # Added last so it runs first and the id is set for request logging
    app.add_middleware(CorrelationMiddleware)

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "ragchat.main:app",
        host="0.0.0.0",
        port=8000,
    )
