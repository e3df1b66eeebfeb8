"""
Conversation memory adapter.

Business-level access to conversations and their messages. Each call opens
its own session, commits, and maps storage failures to PersistenceError.
Also converts stored rows to LangChain messages for the chat agent.

Dependencies: sqlalchemy, langchain_core.messages, ragchat.boundary.db.CRUD
System role: Chat history business logic adapter
"""

import logging
from collections.abc import Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ragchat.boundary.db.CRUD.conversation_crud import conversation_crud
from ragchat.boundary.db.CRUD.message_crud import message_crud
from ragchat.boundary.db.models.conversation_model import (
    ConversationModel,
    MessageModel,
    MessageRole,
)
from ragchat.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

_MESSAGE_TYPES: dict[MessageRole, type[BaseMessage]] = {
    MessageRole.USER: HumanMessage,
    MessageRole.ASSISTANT: AIMessage,
    MessageRole.SYSTEM: SystemMessage,
}


def to_langchain_message(message: MessageModel) -> BaseMessage:
    """Stored message -> LangChain message of the matching role."""
    return _MESSAGE_TYPES[MessageRole(message.role)](content=message.content)


class ConversationMemory:
    """
    Conversation and message persistence for one application.

    All operations are scoped by ``user_id`` and ``conversation_id``.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Args:
            session_factory: Factory producing AsyncSession instances
        """
        self._session_factory = session_factory

    async def ensure_conversation(
        self,
        conversation_id: str,
        user_id: str,
        title: str | None = None,
    ) -> ConversationModel:
        """Create the conversation if missing; ``title`` only applies on creation."""
        try:
            async with self._session_factory() as session:
                conversation = await conversation_crud.get_or_create(
                    session, conversation_id=conversation_id, user_id=user_id, title=title
                )
                await session.commit()
                return conversation
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to load conversation: {e}",
                operation="ensure_conversation",
                details={"conversation_id": conversation_id},
            ) from e

    async def add_message(
        self,
        conversation_id: str,
        user_id: str,
        role: MessageRole,
        content: str,
        embedding: list[float] | None = None,
    ) -> MessageModel:
        """
        Append a message, creating the conversation on first use.

        Raises:
            PersistenceError: Storage failure
        """
        try:
            async with self._session_factory() as session:
                conversation = await conversation_crud.get_or_create(
                    session,
                    conversation_id=conversation_id,
                    user_id=user_id,
                    title=content if role == MessageRole.USER else None,
                )
                message = await message_crud.add(
                    session,
                    user_id=user_id,
                    conversation_id=conversation_id,
                    role=role,
                    content=content,
                    embedding=embedding,
                )
                await conversation_crud.touch(session, conversation)
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to store message: {e}",
                operation="add_message",
                details={"conversation_id": conversation_id, "role": MessageRole(role).value},
            ) from e

        logger.debug(
            "Stored message",
            extra={"conversation_id": conversation_id, "role": MessageRole(role).value, "embedded": embedding is not None},
        )
        return message

    async def get_messages(
        self,
        conversation_id: str,
        user_id: str,
        limit: int | None = None,
    ) -> list[MessageModel]:
        """Latest ``limit`` messages, oldest first."""
        try:
            async with self._session_factory() as session:
                return await message_crud.get_recent(
                    session, user_id=user_id, conversation_id=conversation_id, limit=limit
                )
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to load messages: {e}",
                operation="get_messages",
                details={"conversation_id": conversation_id},
            ) from e

    async def recall_similar(
        self,
        conversation_id: str,
        user_id: str,
        embedding: list[float],
        limit: int,
        threshold: float,
        exclude_ids: Sequence[int] = (),
    ) -> list[MessageModel]:
        """Earlier messages semantically close to ``embedding``, in chronological order."""
        try:
            async with self._session_factory() as session:
                matches = await message_crud.search_similar(
                    session,
                    user_id=user_id,
                    conversation_id=conversation_id,
                    embedding=embedding,
                    limit=limit,
                    threshold=threshold,
                    exclude_ids=exclude_ids,
                )
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Semantic recall failed: {e}",
                operation="recall_similar",
                details={"conversation_id": conversation_id},
            ) from e

        return sorted((message for message, _ in matches), key=lambda m: m.id)

    async def list_conversations(self, user_id: str, limit: int = 50) -> list[ConversationModel]:
        """Most recently active conversations first."""
        try:
            async with self._session_factory() as session:
                return list(await conversation_crud.list_by_user(session, user_id=user_id, limit=limit))
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to list conversations: {e}",
                operation="list_conversations",
            ) from e
