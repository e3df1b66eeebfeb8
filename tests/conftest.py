"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic embeddings, in-memory vector store, SQLite async
database, mock chat agent
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import hashlib
import math
import re
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from langchain_core.embeddings import Embeddings

from ragchat.boundary.vdb.memory_store import InMemoryVectorStore
from ragchat.core.agentic_system.agent.chat_agent_schema import GenerationResult
from ragchat.core.embedding_client import EmbeddingClient

DIMENSION = 1536
_WORD_RE = re.compile(r"[a-z0-9]+")


class HashingEmbeddings(Embeddings):
    """
    Deterministic bag-of-words embeddings.

    Each lowercase word is hashed into one of ``dimension`` buckets and the
    vector is L2-normalised, so texts sharing words have positive cosine
    similarity and identical texts have similarity 1.0.
    """

    def __init__(self, dimension: int = DIMENSION) -> None:
        self.dimension = dimension
        self.calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        words = _WORD_RE.findall(text.lower()) or [text]
        for word in words:
            bucket = int(hashlib.md5(word.encode("utf-8")).hexdigest(), 16) % self.dimension
            vector[bucket] += 1.0
        norm = math.sqrt(sum(x * x for x in vector))
        return [x / norm for x in vector]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        return self._vector(text)


@pytest.fixture
def hashing_embeddings() -> HashingEmbeddings:
    """Provide deterministic embeddings that record their inputs."""
    return HashingEmbeddings()


@pytest.fixture
def embedding_client(hashing_embeddings: HashingEmbeddings) -> EmbeddingClient:
    """Provide EmbeddingClient over HashingEmbeddings."""
    return EmbeddingClient(hashing_embeddings, dimension=DIMENSION, model_name="hashing-test")


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    """Provide empty in-memory vector store."""
    return InMemoryVectorStore(dimension=DIMENSION)


@pytest_asyncio.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with every table created.

    Yields:
        AsyncEngine: Engine shared by all sessions of one test
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from ragchat.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Provide session factory bound to the SQLite test engine."""
    from ragchat.boundary.db.connection import create_session_factory

    return create_session_factory(test_engine)


@pytest_asyncio.fixture
async def test_async_db(test_session_factory):
    """
    Create SQLite async session for CRUD tests.

    Yields:
        AsyncSession: Test database session, rolled back afterwards
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_chat_agent() -> AsyncMock:
    """Provide ChatAgent mock answering every turn with a fixed text."""
    agent = AsyncMock()
    agent.generate = AsyncMock(return_value=GenerationResult(text="Mock answer"))
    return agent
