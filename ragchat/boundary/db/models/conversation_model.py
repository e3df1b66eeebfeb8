"""
Conversation and message ORM models.

Append-only message log keyed by ``(user_id, conversation_id)``. Messages
optionally carry an embedding used for semantic recall of earlier turns.

Dependencies: sqlalchemy, pgvector
System role: Conversation memory persistence
"""

import enum

from pgvector.sqlalchemy import Vector
from sqlalchemy import Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ragchat.boundary.db.base import Base, CreatedAtMixin, TimestampMixin
from ragchat.boundary.db.models.document_chunk_model import EMBEDDING_DIMENSION


class MessageRole(str, enum.Enum):
    """Role of a stored message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ConversationModel(Base, TimestampMixin):
    """
    Conversation owned by a user.

    Attributes:
        id: Client-visible conversation id (e.g. ``conv_1718000000000``)
        user_id: Owner
        title: First user message, shortened
        messages: Messages in insertion order (cascade delete)
    """

    __tablename__ = "conversations"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="New conversation")

    messages = relationship(
        "MessageModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="MessageModel.id",
    )


class MessageModel(Base, CreatedAtMixin):
    """
    Single message in a conversation.

    Attributes:
        id: Auto-increment key; ascending id is chronological order
        conversation_id: Parent conversation (cascade delete)
        user_id: Owner, denormalised for scoped queries
        role: user / assistant / system
        content: Message text
        embedding: Optional vector for semantic recall
    """

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    conversation_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[MessageRole] = mapped_column(
        Enum(MessageRole, native_enum=False, length=16),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float] | None] = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=True)

    conversation = relationship("ConversationModel", back_populates="messages")

    __table_args__ = (
        Index("ix_messages_user_conversation", "user_id", "conversation_id"),
    )
