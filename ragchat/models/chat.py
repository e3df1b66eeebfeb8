"""
Chat domain models and schemas.

Request/response schemas for the ingest, chat and history endpoints.
Field aliases keep the camelCase wire format (``conversationId``).

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class IngestRequest(_CamelModel):
    """Request schema for document ingestion."""

    text: str | None = Field(default=None, description="Raw document text")
    conversation_id: str | None = Field(
        default=None,
        alias="conversationId",
        description="Conversation that receives the ingestion marker",
    )


class IngestResponse(BaseModel):
    """Response schema for document ingestion."""

    success: bool = True


class ChatRequest(_CamelModel):
    """Request schema for chat messages."""

    text: str | None = Field(default=None, description="User question or message")
    conversation_id: str | None = Field(default=None, alias="conversationId")


class ChatResponse(_CamelModel):
    """Response schema for chat messages."""

    text: str
    conversation_id: str = Field(alias="conversationId")


class MultimodalChatResponse(_CamelModel):
    """Response schema for file + question chat."""

    answer: str
    conversation_id: str = Field(alias="conversationId")


class ChatMessageResponse(_CamelModel):
    """Single chat message in history."""

    id: str
    role: str = Field(description="Message role: 'user', 'assistant' or 'system'")
    content: str
    created_at: datetime = Field(alias="createdAt")


class ConversationResponse(_CamelModel):
    """Conversation summary for the history sidebar."""

    id: str
    user_id: str = Field(alias="userId")
    title: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class ConversationListResponse(BaseModel):
    """Response schema for conversation listing."""

    conversations: list[ConversationResponse]


class HistoryResponse(_CamelModel):
    """Response schema for chat history."""

    user_id: str = Field(alias="userId")
    conversation_id: str = Field(alias="conversationId")
    messages: list[ChatMessageResponse]


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(description="Error message")
