"""
Database models package.

Exports:
  - DocumentChunkModel: ingested chunk with embedding
  - ConversationModel, MessageModel, MessageRole: conversation memory

Dependencies: sqlalchemy, pgvector, ragchat.boundary.db.base
System role: Database model definitions
"""

from ragchat.boundary.db.models.conversation_model import (
    ConversationModel,
    MessageModel,
    MessageRole,
)
from ragchat.boundary.db.models.document_chunk_model import (
    EMBEDDING_DIMENSION,
    DocumentChunkModel,
)

__all__ = [
    "ConversationModel",
    "DocumentChunkModel",
    "EMBEDDING_DIMENSION",
    "MessageModel",
    "MessageRole",
]
