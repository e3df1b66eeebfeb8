"""
Database boundary layer: ORM models, CRUD operations, connection management.

Exports:
  - Base: Model building block
  - create_engine_from_settings(), create_session_factory(): async connection management
  - create_all_tables(): idempotent schema initialization
  - DocumentChunkModel, ConversationModel, MessageModel, MessageRole
  - conversation_crud, message_crud: CRUD singletons

Dependencies: sqlalchemy, pgvector, ragchat.configs
System role: Persistent storage for document chunks and conversation memory
"""

from ragchat.boundary.db.base import Base
from ragchat.boundary.db.connection import create_engine_from_settings, create_session_factory
from ragchat.boundary.db.create_tables import create_all_tables
from ragchat.boundary.db.models import (
    ConversationModel,
    DocumentChunkModel,
    MessageModel,
    MessageRole,
)
from ragchat.boundary.db.CRUD import conversation_crud, message_crud

__all__ = [
    "Base",
    "ConversationModel",
    "DocumentChunkModel",
    "MessageModel",
    "MessageRole",
    "conversation_crud",
    "create_all_tables",
    "create_engine_from_settings",
    "create_session_factory",
    "message_crud",
]
