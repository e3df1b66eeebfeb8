"""
Conversation CRUD operations.

Dependencies: sqlalchemy, ragchat.boundary.db.models
System role: Conversation persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.base import utcnow
from ragchat.boundary.db.models.conversation_model import ConversationModel

TITLE_MAX_CHARS = 50


class ConversationCRUD(BaseCRUD[ConversationModel]):
    """CRUD operations for ConversationModel."""

    def __init__(self) -> None:
        super().__init__(ConversationModel)

    async def get_or_create(
        self,
        session: AsyncSession,
        conversation_id: str,
        user_id: str,
        title: str | None = None,
    ) -> ConversationModel:
        """
        Return the conversation, creating it on first use.

        Args:
            session: Async database session
            conversation_id: Client-visible conversation id
            user_id: Owner
            title: Seed text for the title; shortened to 50 characters
        """
        conversation = await self.get_by_id(session, conversation_id)
        if conversation is not None:
            return conversation

        return await self.create(
            session,
            id=conversation_id,
            user_id=user_id,
            title=make_title(title),
        )

    async def touch(self, session: AsyncSession, conversation: ConversationModel) -> None:
        """Bump ``updated_at`` so listings sort by last activity."""
        conversation.updated_at = utcnow()
        await session.flush()

    async def list_by_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int = 50,
    ) -> Sequence[ConversationModel]:
        """Most recently active conversations of ``user_id`` first."""
        stmt = (
            select(ConversationModel)
            .where(ConversationModel.user_id == user_id)
            .order_by(ConversationModel.updated_at.desc(), ConversationModel.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


def make_title(text: str | None) -> str:
    """First line of ``text`` cut to the title length."""
    if not text or not text.strip():
        return "New conversation"
    first_line = text.strip().splitlines()[0]
    if len(first_line) > TITLE_MAX_CHARS:
        return first_line[:TITLE_MAX_CHARS].rstrip() + "..."
    return first_line


conversation_crud = ConversationCRUD()
