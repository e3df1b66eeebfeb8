"""
Chat service for document ingestion and conversational Q&A with RAG.

Orchestrates the HTTP-facing flows: ingestion with a conversation marker,
retrieval-augmented chat, file + question chat, and history listings.

Dependencies: ragchat.application, ragchat.core, langchain_core.messages
System role: Chat service orchestration layer
"""

import logging
import time

from langchain_core.messages import BaseMessage, HumanMessage

from ragchat.application.adapters.conversation_memory import ConversationMemory
from ragchat.application.ingestion_pipeline import IngestionPipeline, IngestionResult
from ragchat.application.retrieval_pipeline import RetrievalPipeline
from ragchat.boundary.db.models.conversation_model import MessageRole
from ragchat.core.agentic_system.agent.chat_agent import ChatAgent
from ragchat.core.agentic_system.agent.chat_agent_schema import (
    GenerateOptions,
    SemanticMemoryConfig,
)
from ragchat.core.context_assembler import ContextAssembler
from ragchat.core.exceptions import EmptyInputError
from ragchat.models.chat import (
    ChatMessageResponse,
    ChatResponse,
    ConversationListResponse,
    ConversationResponse,
    HistoryResponse,
    MultimodalChatResponse,
)

logger = logging.getLogger(__name__)

INGESTION_MARKER = "[Document ingested into knowledge base as chunks]\n"
DEFAULT_SUMMARY_QUESTION = "Summarize the uploaded document."
DEFAULT_EXPLAIN_QUESTION = "Explain the uploaded content."
NO_ANSWER = "(no answer)"


def new_conversation_id() -> str:
    """``conv_<epoch milliseconds>``."""
    return f"conv_{int(time.time() * 1000)}"


def ingestion_marker(text: str, preview_chars: int = 300) -> str:
    """History entry recording that ``text`` was ingested."""
    preview = text[:preview_chars]
    if len(text) > preview_chars:
        preview += "..."
    return INGESTION_MARKER + preview


class ChatService:
    """
    Chat service for RAG-backed conversations.

    All conversations belong to a single configured user.
    """

    def __init__(
        self,
        ingestion: IngestionPipeline,
        retrieval: RetrievalPipeline,
        assembler: ContextAssembler,
        agent: ChatAgent,
        memory: ConversationMemory,
        user_id: str = "default-user",
        retrieval_limit: int = 5,
        preview_chars: int = 300,
        context_window: int = 10,
        semantic_memory: SemanticMemoryConfig | None = None,
        history_limit: int = 50,
        conversation_limit: int = 50,
    ) -> None:
        """
        Initialize chat service.

        Args:
            ingestion: Write path into the knowledge base
            retrieval: Read path out of the knowledge base
            assembler: Snippet formatting for the context message
            agent: Generation call
            memory: Conversation storage
            user_id: Owner of every conversation
            retrieval_limit: Chunks retrieved per question
            preview_chars: Characters of ingested text kept in the marker
            context_window: Recent messages sent to the model
            semantic_memory: Semantic recall settings
            history_limit: Messages returned by history listing
            conversation_limit: Conversations returned by listing
        """
        self.ingestion = ingestion
        self.retrieval = retrieval
        self.assembler = assembler
        self.agent = agent
        self.memory = memory
        self.user_id = user_id
        self.retrieval_limit = retrieval_limit
        self.preview_chars = preview_chars
        self.context_window = context_window
        self.semantic_memory = semantic_memory or SemanticMemoryConfig()
        self.history_limit = history_limit
        self.conversation_limit = conversation_limit

    async def ingest_document(
        self,
        text: str | None,
        conversation_id: str | None = None,
    ) -> IngestionResult:
        """
        Add a document to the knowledge base.

        When ``conversation_id`` is given, a system marker with a preview of
        the text is appended to that conversation.

        Raises:
            EmptyInputError: Blank text
            EmbeddingProviderError: Embedding a chunk failed
            PersistenceError: Storing a chunk or the marker failed
        """
        if not text or not text.strip():
            raise EmptyInputError("text is required", field="text")

        result = await self.ingestion.ingest(text)

        if conversation_id:
            await self.memory.add_message(
                conversation_id,
                self.user_id,
                MessageRole.SYSTEM,
                ingestion_marker(text.strip(), self.preview_chars),
            )
        return result

    async def chat(self, text: str | None, conversation_id: str | None = None) -> ChatResponse:
        """
        Answer a message with document context when any is found.

        Flow:
        1. Reject blank text before any retrieval or generation
        2. Retrieve top chunks (failures degrade to no context)
        3. Assemble context into an optional system message
        4. Generate with conversation memory

        Raises:
            EmptyInputError: Blank text
        """
        if not text or not text.strip():
            raise EmptyInputError("text is required", field="text")

        conversation_id = conversation_id or new_conversation_id()

        outcome = await self.retrieval.retrieve(text, limit=self.retrieval_limit)
        if outcome.failed:
            logger.warning(
                "Answering without document context",
                extra={"conversation_id": conversation_id, "reason": outcome.error},
            )

        messages: list[BaseMessage] = []
        context_message = self.assembler.build_context_message(
            self.assembler.assemble(outcome.results)
        )
        if context_message is not None:
            messages.append(context_message)
        messages.append(HumanMessage(content=text))

        result = await self.agent.generate(
            messages,
            GenerateOptions(
                user_id=self.user_id,
                conversation_id=conversation_id,
                semantic_memory=self.semantic_memory,
                history_limit=self.context_window,
            ),
        )
        return ChatResponse(text=result.text, conversation_id=conversation_id)

    async def multimodal_chat(
        self,
        file_text: str | None,
        question: str | None,
        conversation_id: str | None = None,
    ) -> MultimodalChatResponse:
        """
        Ingest an uploaded file (if any) and ask a question about it.

        A blank question defaults to a summary request when a file was
        supplied, otherwise to a generic explanation request.
        """
        conversation_id = conversation_id or new_conversation_id()
        file_text = (file_text or "").strip()

        if file_text:
            await self.ingest_document(file_text, conversation_id)

        effective_question = (question or "").strip()
        if not effective_question:
            effective_question = DEFAULT_SUMMARY_QUESTION if file_text else DEFAULT_EXPLAIN_QUESTION

        response = await self.chat(effective_question, conversation_id)
        return MultimodalChatResponse(
            answer=response.text or NO_ANSWER,
            conversation_id=conversation_id,
        )

    async def list_conversations(self, limit: int | None = None) -> ConversationListResponse:
        conversations = await self.memory.list_conversations(
            self.user_id, limit=limit or self.conversation_limit
        )
        return ConversationListResponse(
            conversations=[
                ConversationResponse(
                    id=c.id,
                    user_id=c.user_id,
                    title=c.title,
                    created_at=c.created_at,
                    updated_at=c.updated_at,
                )
                for c in conversations
            ]
        )

    async def get_history(self, conversation_id: str, limit: int | None = None) -> HistoryResponse:
        """
        Latest ``limit`` messages of a conversation, oldest first.

        Raises:
            ValidationError: Missing conversation id
        """
        if not conversation_id or not conversation_id.strip():
            raise EmptyInputError("conversationId is required", field="conversationId")

        messages = await self.memory.get_messages(
            conversation_id, self.user_id, limit=limit or self.history_limit
        )
        return HistoryResponse(
            user_id=self.user_id,
            conversation_id=conversation_id,
            messages=[
                ChatMessageResponse(
                    id=str(m.id),
                    role=MessageRole(m.role).value,
                    content=m.content,
                    created_at=m.created_at,
                )
                for m in messages
            ],
        )
