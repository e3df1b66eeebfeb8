"""
Conversation history API endpoints.

Routes:
- GET /conversations - Most recently active conversations
- GET /history?conversationId= - Messages of one conversation

Dependencies: ragchat.application.services.chat_service
System role: Conversation history HTTP API
"""

from fastapi import APIRouter, Depends, Query

from ragchat.api.deps import get_chat_service
from ragchat.api.routers.error_handling import handle_api_errors
from ragchat.application.services.chat_service import ChatService
from ragchat.models.chat import ConversationListResponse, ErrorResponse, HistoryResponse

router = APIRouter(tags=["conversations"])


@router.get("/conversations", response_model=ConversationListResponse)
@handle_api_errors
async def list_conversations(
    chat_service: ChatService = Depends(get_chat_service),
) -> ConversationListResponse:
    return await chat_service.list_conversations()


@router.get("/history", response_model=HistoryResponse, responses={400: {"model": ErrorResponse}})
@handle_api_errors
async def get_history(
    conversation_id: str | None = Query(default=None, alias="conversationId"),
    chat_service: ChatService = Depends(get_chat_service),
) -> HistoryResponse:
    """Latest messages of a conversation; 400 when ``conversationId`` is missing."""
    return await chat_service.get_history(conversation_id or "")
