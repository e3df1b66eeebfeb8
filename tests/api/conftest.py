"""
API test fixtures.

Provides the assembled FastAPI app with the chat service overridden by a
real ChatService (in-memory store, deterministic embeddings, mocked agent
and conversation memory).
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ragchat.api.deps import get_chat_service
from ragchat.application.ingestion_pipeline import IngestionPipeline
from ragchat.application.retrieval_pipeline import RetrievalPipeline
from ragchat.application.services.chat_service import ChatService
from ragchat.core.chunker import TextChunker
from ragchat.core.context_assembler import ContextAssembler
from ragchat.main import create_app


@pytest.fixture
def mock_memory() -> AsyncMock:
    """Provide mock ConversationMemory."""
    memory = AsyncMock()
    memory.get_messages.return_value = []
    memory.list_conversations.return_value = []
    return memory


@pytest.fixture
def chat_service(embedding_client, memory_store, mock_chat_agent, mock_memory) -> ChatService:
    """Provide ChatService wired to test doubles."""
    return ChatService(
        ingestion=IngestionPipeline(TextChunker(), embedding_client, memory_store),
        retrieval=RetrievalPipeline(embedding_client, memory_store),
        assembler=ContextAssembler(),
        agent=mock_chat_agent,
        memory=mock_memory,
        user_id="test-user",
    )


@pytest.fixture
def app(chat_service: ChatService) -> FastAPI:
    """Create application with the chat service overridden."""
    app = create_app()
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app (lifespan not started)."""
    return TestClient(app)
