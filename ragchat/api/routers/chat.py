"""
Chat API endpoints.

Routes:
- POST /chat - RAG-augmented chat message
- POST /mm-chat - Multipart file + question chat

Dependencies: ragchat.application.services.chat_service
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ragchat.api.deps import get_chat_service
from ragchat.api.routers.error_handling import handle_api_errors
from ragchat.application.services.chat_service import ChatService
from ragchat.models.chat import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    MultimodalChatResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


async def read_upload_text(file: UploadFile | None) -> str:
    """Uploaded file content decoded as UTF-8 (undecodable bytes replaced)."""
    if file is None:
        return ""
    data = await file.read()
    logger.info(
        "Received upload",
        extra={"upload_filename": file.filename, "content_type": file.content_type, "bytes": len(data)},
    )
    return data.decode("utf-8", errors="replace")


@router.post("/chat", response_model=ChatResponse, responses={400: {"model": ErrorResponse}})
@handle_api_errors
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a message using uploaded documents as context.

    Retrieval failures never fail the request; the answer is generated
    without document context instead.
    """
    return await chat_service.chat(request.text, request.conversation_id)


@router.post("/mm-chat", response_model=MultimodalChatResponse, responses={400: {"model": ErrorResponse}})
@handle_api_errors
async def multimodal_chat(
    file: UploadFile | None = File(default=None),
    question: str | None = Form(default=None),
    conversation_id: str | None = Form(default=None, alias="conversationId"),
    chat_service: ChatService = Depends(get_chat_service),
) -> MultimodalChatResponse:
    """Ingest an optional uploaded file, then answer a question about it."""
    file_text = await read_upload_text(file)
    return await chat_service.multimodal_chat(file_text, question, conversation_id)
