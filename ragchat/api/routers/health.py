"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/vector-store

Dependencies: sqlalchemy, ragchat.api.deps
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ragchat.api.deps import get_session_factory, get_vector_store_dependency
from ragchat.boundary.vdb.vector_schemas import VectorStore
from ragchat.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


def _unhealthy(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=HealthResponse(status="unhealthy", message=message).model_dump(),
    )


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(
    session_factory: async_sessionmaker = Depends(get_session_factory),
):
    """Database health check (``SELECT 1``)."""
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return _unhealthy("Database unreachable")
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    vector_store: VectorStore = Depends(get_vector_store_dependency),
):
    """Vector store health check (row count)."""
    try:
        rows = await vector_store.count()
    except PersistenceError as e:
        logger.warning("Vector store health check failed", extra={"error": str(e)})
        return _unhealthy("Vector store unreachable")
    return HealthResponse(status="healthy", message=f"Vector store accessible ({rows} chunks)")
