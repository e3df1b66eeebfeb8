"""
Test suite for POST /api/chat and POST /api/mm-chat.

System role: Verification of chat HTTP API
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from langchain_core.messages import HumanMessage, SystemMessage

from ragchat.api.deps import get_chat_service
from ragchat.application.services.chat_service import DEFAULT_EXPLAIN_QUESTION, DEFAULT_SUMMARY_QUESTION


class TestChatEndpoint:
    """Test suite for POST /api/chat."""

    def test_chat_should_return_text_and_conversation_id(self, client: TestClient) -> None:
        response = client.post("/api/chat", json={"text": "Hello", "conversationId": "conv_1"})

        assert response.status_code == 200
        assert response.json() == {"text": "Mock answer", "conversationId": "conv_1"}

    @pytest.mark.parametrize("body", [{"text": ""}, {"text": None}, {"conversationId": "conv_1"}])
    def test_chat_should_reject_blank_text_without_generation(
        self,
        client: TestClient,
        mock_chat_agent: AsyncMock,
        body: dict,
    ) -> None:
        response = client.post("/api/chat", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "text is required"}
        mock_chat_agent.generate.assert_not_awaited()

    def test_chat_should_include_document_context(
        self,
        client: TestClient,
        mock_chat_agent: AsyncMock,
    ) -> None:
        # Arrange
        client.post("/api/documents/ingest", json={"text": "The sky is blue."})

        # Act
        client.post("/api/chat", json={"text": "What color is the sky?"})

        # Assert
        messages = mock_chat_agent.generate.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert "The sky is blue." in messages[0].content

    def test_chat_should_succeed_when_retrieval_embedding_fails(
        self,
        client: TestClient,
        chat_service,
        mock_chat_agent: AsyncMock,
    ) -> None:
        # Arrange
        failing = AsyncMock()
        failing.embed.side_effect = RuntimeError("embedding provider down")
        chat_service.retrieval.embedding_client = failing

        # Act
        response = client.post("/api/chat", json={"text": "What color is the sky?"})

        # Assert
        assert response.status_code == 200
        assert response.json()["text"] == "Mock answer"
        assert mock_chat_agent.generate.await_args.args[0] == [HumanMessage(content="What color is the sky?")]

    def test_chat_should_hide_unexpected_errors(self, app: FastAPI) -> None:
        service = AsyncMock()
        service.chat.side_effect = RuntimeError("secret internals")
        app.dependency_overrides[get_chat_service] = lambda: service

        response = TestClient(app).post("/api/chat", json={"text": "Hello"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_response_should_carry_correlation_id(self, client: TestClient) -> None:
        generated = client.post("/api/chat", json={"text": "Hello"})
        echoed = client.post("/api/chat", json={"text": "Hello"}, headers={"X-Correlation-ID": "req-123"})

        assert generated.headers["X-Correlation-ID"]
        assert echoed.headers["X-Correlation-ID"] == "req-123"


class TestMultimodalChatEndpoint:
    """Test suite for POST /api/mm-chat."""

    def test_mm_chat_should_ingest_file_and_summarize(
        self,
        client: TestClient,
        mock_chat_agent: AsyncMock,
        memory_store,
    ) -> None:
        # Act
        response = client.post(
            "/api/mm-chat",
            files={"file": ("notes.txt", b"Quarterly revenue grew by ten percent.", "text/plain")},
            data={"conversationId": "conv_3"},
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {"answer": "Mock answer", "conversationId": "conv_3"}
        assert memory_store._records
        assert mock_chat_agent.generate.await_args.args[0][-1] == HumanMessage(content=DEFAULT_SUMMARY_QUESTION)

    def test_mm_chat_should_use_question_when_given(
        self,
        client: TestClient,
        mock_chat_agent: AsyncMock,
    ) -> None:
        response = client.post(
            "/api/mm-chat",
            files={"file": ("notes.txt", b"Paris is in France.", "text/plain")},
            data={"question": "Where is Paris?"},
        )

        assert response.status_code == 200
        assert response.json()["conversationId"].startswith("conv_")
        assert mock_chat_agent.generate.await_args.args[0][-1] == HumanMessage(content="Where is Paris?")

    def test_mm_chat_without_file_should_ask_for_explanation(
        self,
        client: TestClient,
        mock_chat_agent: AsyncMock,
    ) -> None:
        response = client.post("/api/mm-chat", data={"conversationId": "conv_9"})

        assert response.status_code == 200
        assert mock_chat_agent.generate.await_args.args[0][-1] == HumanMessage(content=DEFAULT_EXPLAIN_QUESTION)
