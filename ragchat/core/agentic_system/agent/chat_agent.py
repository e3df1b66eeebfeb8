"""
Chat agent implementation.

Conversational agent over Google Gemini with calculator and weather tools.
Loads recent and semantically recalled history from conversation memory,
invokes a LangChain v1 agent and persists the turn.

Dependencies: langchain.agents, langchain_google_genai, ragchat.application.adapters
System role: Chat generation orchestration
"""

import logging
from collections.abc import Sequence

from langchain.agents import create_agent
from langchain_core.messages import BaseMessage, HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from ragchat.application.adapters.conversation_memory import (
    ConversationMemory,
    to_langchain_message,
)
from ragchat.boundary.db.models.conversation_model import MessageModel, MessageRole
from ragchat.core.agentic_system.agent.chat_agent_prompt import get_system_prompt
from ragchat.core.agentic_system.agent.chat_agent_schema import GenerateOptions, GenerationResult
from ragchat.core.embedding_client import EmbeddingClient
from ragchat.core.exceptions import RagChatException

logger = logging.getLogger(__name__)


def message_text(message: BaseMessage) -> str:
    """Plain text of a message whose content may be a list of parts."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class ChatAgent:
    """
    Memory-backed chat agent.

    One generate() call is one conversational turn: history in, answer out,
    both sides of the turn persisted.
    """

    def __init__(
        self,
        memory: ConversationMemory,
        embedding_client: EmbeddingClient | None,
        tools: Sequence | None = None,
        model=None,
        model_id: str = "gemini-2.5-flash",
        temperature: float = 0.0,
    ) -> None:
        """
        Initialize chat agent.

        Args:
            memory: Conversation memory adapter
            embedding_client: Used for semantic recall and message embeddings;
                None disables both
            tools: LangChain tools offered to the model
            model: Chat model instance; built from ``model_id`` when omitted
            model_id: Google Gemini model identifier
            temperature: Model temperature (0.0 for deterministic)
        """
        self._memory = memory
        self._embedding_client = embedding_client
        self._model_id = model_id

        if model is None:
            model = ChatGoogleGenerativeAI(model=model_id, temperature=temperature)

        self._agent = create_agent(
            model=model,
            tools=list(tools or []),
            system_prompt=get_system_prompt(),
        )

    async def generate(
        self,
        messages: Sequence[BaseMessage],
        options: GenerateOptions,
    ) -> GenerationResult:
        """
        Run one conversational turn.

        Args:
            messages: Supplied messages in order; an optional RAG system
                message followed by the user message
            options: User, conversation, history and semantic memory options

        Returns:
            GenerationResult: Final assistant text

        Raises:
            PersistenceError: Conversation memory is unavailable
        """
        user_texts = [message_text(m) for m in messages if isinstance(m, HumanMessage)]
        latest = user_texts[-1] if user_texts else ""
        semantic = options.semantic_memory
        use_embeddings = semantic.enabled and self._embedding_client is not None

        await self._memory.ensure_conversation(
            options.conversation_id,
            options.user_id,
            title=user_texts[0] if user_texts else None,
        )

        recent = await self._memory.get_messages(
            options.conversation_id,
            options.user_id,
            limit=options.history_limit,
        )

        query_embedding = await self._embed_quietly(latest) if use_embeddings else None
        recalled: list[MessageModel] = []
        if query_embedding is not None and semantic.semantic_limit > 0:
            try:
                recalled = await self._memory.recall_similar(
                    options.conversation_id,
                    options.user_id,
                    embedding=query_embedding,
                    limit=semantic.semantic_limit,
                    threshold=semantic.semantic_threshold,
                    exclude_ids=[m.id for m in recent],
                )
            except RagChatException as e:
                logger.warning(
                    "Semantic recall failed, using recent history only",
                    extra={"conversation_id": options.conversation_id, "error": str(e)},
                )

        history = {m.id: m for m in [*recalled, *recent]}
        prompt = [to_langchain_message(history[i]) for i in sorted(history)]
        prompt.extend(messages)

        logger.info(
            "Invoking chat agent",
            extra={
                "conversation_id": options.conversation_id,
                "recent": len(recent),
                "recalled": len(recalled),
                "supplied": len(messages),
            },
        )
        result = await self._agent.ainvoke({"messages": prompt})
        output = result.get("messages", [])
        answer = message_text(output[-1]).strip() if output else ""

        for index, text in enumerate(user_texts):
            is_latest = index == len(user_texts) - 1
            embedding = None
            if use_embeddings:
                embedding = query_embedding if is_latest else await self._embed_quietly(text)
            await self._memory.add_message(
                options.conversation_id,
                options.user_id,
                MessageRole.USER,
                text,
                embedding=embedding,
            )

        if answer:
            embedding = await self._embed_quietly(answer) if use_embeddings else None
            await self._memory.add_message(
                options.conversation_id,
                options.user_id,
                MessageRole.ASSISTANT,
                answer,
                embedding=embedding,
            )

        return GenerationResult(text=answer)

    async def _embed_quietly(self, text: str) -> list[float] | None:
        """Embedding for memory purposes; None when unavailable."""
        if not text.strip():
            return None
        try:
            return await self._embedding_client.embed(text)
        except RagChatException as e:
            logger.warning("Message embedding failed", extra={"error": str(e)})
            return None
