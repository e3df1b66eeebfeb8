"""Pydantic domain models and API schemas."""

from ragchat.models.chat import (
    ChatMessageResponse,
    ChatRequest,
    ChatResponse,
    ConversationListResponse,
    ConversationResponse,
    ErrorResponse,
    HistoryResponse,
    IngestRequest,
    IngestResponse,
    MultimodalChatResponse,
)
from ragchat.models.chunk import Chunk

__all__ = [
    "ChatMessageResponse",
    "ChatRequest",
    "ChatResponse",
    "Chunk",
    "ConversationListResponse",
    "ConversationResponse",
    "ErrorResponse",
    "HistoryResponse",
    "IngestRequest",
    "IngestResponse",
    "MultimodalChatResponse",
]
