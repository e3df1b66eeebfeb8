"""
Document ingestion API endpoints.

Routes: POST /documents/ingest

Dependencies: ragchat.application.services.chat_service
System role: Knowledge base write HTTP API
"""

from fastapi import APIRouter, Depends

from ragchat.api.deps import get_chat_service
from ragchat.api.routers.error_handling import handle_api_errors
from ragchat.application.services.chat_service import ChatService
from ragchat.models.chat import ErrorResponse, IngestRequest, IngestResponse

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post(
    "/ingest",
    response_model=IngestResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
@handle_api_errors
async def ingest_document(
    request: IngestRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> IngestResponse:
    """
    Chunk, embed and store document text.

    Returns 400 ``{"error": "text is required"}`` for blank text.
    """
    await chat_service.ingest_document(request.text, request.conversation_id)
    return IngestResponse(success=True)
