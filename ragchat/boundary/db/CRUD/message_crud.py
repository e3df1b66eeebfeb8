"""
Message CRUD operations.

Append-only message log with recency and semantic (cosine) lookups.

Dependencies: sqlalchemy, pgvector, ragchat.boundary.db.models
System role: Conversation message persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.models.conversation_model import MessageModel, MessageRole


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        super().__init__(MessageModel)

    async def add(
        self,
        session: AsyncSession,
        user_id: str,
        conversation_id: str,
        role: MessageRole,
        content: str,
        embedding: list[float] | None = None,
    ) -> MessageModel:
        """Append one message to a conversation."""
        return await self.create(
            session,
            user_id=user_id,
            conversation_id=conversation_id,
            role=role,
            content=content,
            embedding=embedding,
        )

    async def get_recent(
        self,
        session: AsyncSession,
        user_id: str,
        conversation_id: str,
        limit: int | None = None,
    ) -> list[MessageModel]:
        """
        Latest ``limit`` messages of a conversation in chronological order.

        Args:
            limit: Maximum messages (None = all)
        """
        stmt = (
            select(MessageModel)
            .where(
                MessageModel.user_id == user_id,
                MessageModel.conversation_id == conversation_id,
            )
            .order_by(MessageModel.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def search_similar(
        self,
        session: AsyncSession,
        user_id: str,
        conversation_id: str,
        embedding: list[float],
        limit: int,
        threshold: float,
        exclude_ids: Sequence[int] = (),
    ) -> list[tuple[MessageModel, float]]:
        """
        Messages of a conversation whose embedding is close to ``embedding``.

        Returns:
            (message, similarity) pairs with similarity >= ``threshold``,
            most similar first
        """
        distance = MessageModel.embedding.cosine_distance(embedding)
        stmt = (
            select(MessageModel, (1 - distance).label("similarity"))
            .where(
                MessageModel.user_id == user_id,
                MessageModel.conversation_id == conversation_id,
                MessageModel.embedding.is_not(None),
                (1 - distance) >= threshold,
            )
            .order_by(distance.asc(), MessageModel.id.asc())
            .limit(limit)
        )
        if exclude_ids:
            stmt = stmt.where(MessageModel.id.not_in(list(exclude_ids)))
        result = await session.execute(stmt)
        return [(row[0], float(row[1])) for row in result.all()]


message_crud = MessageCRUD()
