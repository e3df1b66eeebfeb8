"""
Dependency injection container.

Builds the application's long-lived components once, from settings, and
exposes them as FastAPI dependencies.

Dependencies: ragchat.configs, ragchat.application, ragchat.boundary, ragchat.core
System role: DI container for service injection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from ragchat.application.adapters.conversation_memory import ConversationMemory
from ragchat.application.ingestion_pipeline import IngestionPipeline
from ragchat.application.retrieval_pipeline import RetrievalPipeline
from ragchat.application.services.chat_service import ChatService
from ragchat.boundary.db.connection import create_engine_from_settings, create_session_factory
from ragchat.boundary.db.create_tables import create_memory_schema
from ragchat.boundary.vdb.vector_schemas import VectorStore
from ragchat.boundary.vdb.vector_store_factory import get_vector_store
from ragchat.configs import Settings, get_settings
from ragchat.core.agentic_system.agent.chat_agent import ChatAgent
from ragchat.core.agentic_system.agent.chat_agent_schema import SemanticMemoryConfig
from ragchat.core.agentic_system.tools import calculate, create_weather_tool
from ragchat.core.chunker import TextChunker
from ragchat.core.context_assembler import ContextAssembler
from ragchat.core.embedding_client import EmbeddingClient

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker | None = None
        self._vector_store: VectorStore | None = None
        self._embedding_client: EmbeddingClient | None = None
        self._chat_service: ChatService | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def engine(self) -> AsyncEngine:
        """Get the shared async engine."""
        if self._engine is None:
            self._engine = create_engine_from_settings(self.settings.database)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._session_factory = create_session_factory(self.engine)
        return self._session_factory

    @property
    def vector_store(self) -> VectorStore:
        """Get cached vector store (pgvector or in-memory per RAG_STORE_TYPE)."""
        if self._vector_store is None:
            rag = self.settings.rag
            if rag.store_type.lower() == "pgvector":
                self._vector_store = get_vector_store(rag, self.engine, self.session_factory)
            else:
                self._vector_store = get_vector_store(rag)
        return self._vector_store

    @property
    def embedding_client(self) -> EmbeddingClient:
        """Get cached embedding client over Google Gemini embeddings."""
        if self._embedding_client is None:
            from ragchat.boundary.vdb.embeddings_wrapper import FixedDimensionEmbeddings

            rag = self.settings.rag
            self._embedding_client = EmbeddingClient(
                FixedDimensionEmbeddings(
                    model=rag.embedding_model,
                    output_dimensionality=rag.embedding_dimension,
                ),
                dimension=rag.embedding_dimension,
                model_name=rag.embedding_model,
            )
        return self._embedding_client

    @property
    def chat_service(self) -> ChatService:
        """Get cached chat service with its pipelines and agent."""
        if self._chat_service is None:
            rag = self.settings.rag
            llm = self.settings.llm
            memory_config = self.settings.memory
            memory = ConversationMemory(self.session_factory)

            agent = ChatAgent(
                memory=memory,
                embedding_client=self.embedding_client,
                tools=[calculate, create_weather_tool(llm)],
                model_id=llm.model_id,
                temperature=llm.temperature,
            )
            self._chat_service = ChatService(
                ingestion=IngestionPipeline(
                    TextChunker(rag.chunk_size, rag.chunk_overlap),
                    self.embedding_client,
                    self.vector_store,
                ),
                retrieval=RetrievalPipeline(self.embedding_client, self.vector_store),
                assembler=ContextAssembler(rag.snippet_max_chars, rag.context_max_chars),
                agent=agent,
                memory=memory,
                user_id=memory_config.user_id,
                retrieval_limit=rag.retrieval_limit,
                preview_chars=rag.preview_chars,
                context_window=memory_config.context_window,
                semantic_memory=SemanticMemoryConfig(
                    enabled=memory_config.semantic_enabled,
                    semantic_limit=memory_config.semantic_limit,
                    semantic_threshold=memory_config.semantic_threshold,
                ),
                history_limit=memory_config.history_limit,
                conversation_limit=memory_config.conversation_limit,
            )
        return self._chat_service

    async def startup(self) -> None:
        """Create the schema and warm every component."""
        await self.vector_store.initialize()
        async with self.engine.begin() as conn:
            await create_memory_schema(conn)
        _ = self.chat_service
        logger.info("Service cache warmed", extra={"store": repr(self.vector_store)})

    async def shutdown(self) -> None:
        """Release the store and the connection pool."""
        if self._vector_store is not None:
            await self._vector_store.close()
        if self._engine is not None:
            await self._engine.dispose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._session_factory = None
        self._vector_store = None
        self._embedding_client = None
        self._chat_service = None


_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_chat_service() -> ChatService:
    return _service_cache.chat_service


def get_session_factory() -> async_sessionmaker:
    return _service_cache.session_factory


def get_vector_store_dependency() -> VectorStore:
    return _service_cache.vector_store
