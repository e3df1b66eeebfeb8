"""
Test suite for ChatAgent.

The LangChain agent is patched; conversation memory is either mocked or
backed by SQLite.

System role: Verification of chat generation orchestration
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from ragchat.application.adapters.conversation_memory import ConversationMemory
from ragchat.boundary.db.models.conversation_model import MessageRole
from ragchat.core.agentic_system.agent.chat_agent import ChatAgent, message_text
from ragchat.core.agentic_system.agent.chat_agent_prompt import SYSTEM_PROMPT
from ragchat.core.agentic_system.agent.chat_agent_schema import GenerateOptions, SemanticMemoryConfig
from ragchat.core.exceptions import EmbeddingProviderError, PersistenceError

CREATE_AGENT = "ragchat.core.agentic_system.agent.chat_agent.create_agent"


@pytest.fixture
def mock_agent() -> MagicMock:
    """Provide compiled-agent mock answering with a fixed AIMessage."""
    agent = MagicMock()
    agent.ainvoke = AsyncMock(
        return_value={"messages": [HumanMessage(content="q"), AIMessage(content="  The sky is blue.  ")]}
    )
    return agent


@pytest.fixture
def mock_memory() -> AsyncMock:
    """Provide mock ConversationMemory with an empty conversation."""
    memory = AsyncMock()
    memory.get_messages.return_value = []
    memory.recall_similar.return_value = []
    return memory


def options(**overrides) -> GenerateOptions:
    values = {"user_id": "u1", "conversation_id": "conv_1", "history_limit": 10}
    values.update(overrides)
    return GenerateOptions(**values)


def build_agent(memory, embedding_client, mock_agent, tools=None) -> ChatAgent:
    with patch(CREATE_AGENT, return_value=mock_agent) as create_agent:
        chat_agent = ChatAgent(memory=memory, embedding_client=embedding_client, tools=tools, model=MagicMock())
    chat_agent.create_agent_call = create_agent.call_args
    return chat_agent


class TestMessageText:
    """Test suite for message_text()."""

    def test_should_return_plain_string_content(self) -> None:
        assert message_text(AIMessage(content="hello")) == "hello"

    def test_should_join_text_parts(self) -> None:
        message = AIMessage(content=[{"type": "text", "text": "Hello "}, {"type": "image_url"}, "world"])

        assert message_text(message) == "Hello world"


class TestChatAgentInit:
    """Test suite for ChatAgent construction."""

    def test_init_should_build_agent_with_prompt_and_tools(self, mock_memory, embedding_client, mock_agent) -> None:
        tool = MagicMock()

        chat_agent = build_agent(mock_memory, embedding_client, mock_agent, tools=[tool])

        kwargs = chat_agent.create_agent_call.kwargs
        assert kwargs["tools"] == [tool]
        assert kwargs["system_prompt"] == SYSTEM_PROMPT


class TestChatAgentGenerate:
    """Test suite for ChatAgent.generate()."""

    @pytest.mark.asyncio
    async def test_generate_should_return_stripped_answer(self, mock_memory, embedding_client, mock_agent) -> None:
        chat_agent = build_agent(mock_memory, embedding_client, mock_agent)

        result = await chat_agent.generate([HumanMessage(content="What color is the sky?")], options())

        assert result.text == "The sky is blue."

    @pytest.mark.asyncio
    async def test_generate_should_title_conversation_from_first_user_message(
        self,
        mock_memory,
        embedding_client,
        mock_agent,
    ) -> None:
        chat_agent = build_agent(mock_memory, embedding_client, mock_agent)

        await chat_agent.generate(
            [SystemMessage(content="context"), HumanMessage(content="What color is the sky?")],
            options(),
        )

        mock_memory.ensure_conversation.assert_awaited_once_with("conv_1", "u1", title="What color is the sky?")

    @pytest.mark.asyncio
    async def test_generate_should_prepend_history_in_chronological_order(
        self,
        mock_memory,
        embedding_client,
        mock_agent,
    ) -> None:
        # Arrange
        recent = [
            SimpleNamespace(id=8, role=MessageRole.USER, content="recent question"),
            SimpleNamespace(id=9, role=MessageRole.ASSISTANT, content="recent answer"),
        ]
        recalled = [SimpleNamespace(id=2, role=MessageRole.USER, content="my name is Sam")]
        mock_memory.get_messages.return_value = recent
        mock_memory.recall_similar.return_value = recalled
        chat_agent = build_agent(mock_memory, embedding_client, mock_agent)
        context = SystemMessage(content="snippets")
        question = HumanMessage(content="What is my name?")

        # Act
        await chat_agent.generate([context, question], options())

        # Assert
        prompt = mock_agent.ainvoke.await_args.args[0]["messages"]
        assert [type(m) for m in prompt] == [HumanMessage, HumanMessage, AIMessage, SystemMessage, HumanMessage]
        assert [m.content for m in prompt] == [
            "my name is Sam",
            "recent question",
            "recent answer",
            "snippets",
            "What is my name?",
        ]
        recall_kwargs = mock_memory.recall_similar.await_args.kwargs
        assert recall_kwargs["exclude_ids"] == [8, 9]
        assert recall_kwargs["limit"] == 10
        assert recall_kwargs["threshold"] == 0.6

    @pytest.mark.asyncio
    async def test_generate_should_deduplicate_recalled_and_recent(
        self,
        mock_memory,
        embedding_client,
        mock_agent,
    ) -> None:
        shared = SimpleNamespace(id=5, role=MessageRole.USER, content="same message")
        mock_memory.get_messages.return_value = [shared]
        mock_memory.recall_similar.return_value = [shared]
        chat_agent = build_agent(mock_memory, embedding_client, mock_agent)

        await chat_agent.generate([HumanMessage(content="again")], options())

        prompt = mock_agent.ainvoke.await_args.args[0]["messages"]
        assert [m.content for m in prompt] == ["same message", "again"]

    @pytest.mark.asyncio
    async def test_generate_should_persist_user_and_assistant_but_not_context(
        self,
        mock_memory,
        embedding_client,
        mock_agent,
    ) -> None:
        # Arrange
        chat_agent = build_agent(mock_memory, embedding_client, mock_agent)

        # Act
        await chat_agent.generate(
            [SystemMessage(content="snippets"), HumanMessage(content="What color is the sky?")],
            options(),
        )

        # Assert
        stored = [(c.args[2], c.args[3]) for c in mock_memory.add_message.await_args_list]
        assert stored == [
            (MessageRole.USER, "What color is the sky?"),
            (MessageRole.ASSISTANT, "The sky is blue."),
        ]
        assert all(len(c.kwargs["embedding"]) == 1536 for c in mock_memory.add_message.await_args_list)

    @pytest.mark.asyncio
    async def test_generate_should_skip_embeddings_when_semantic_memory_disabled(
        self,
        mock_memory,
        embedding_client,
        hashing_embeddings,
        mock_agent,
    ) -> None:
        chat_agent = build_agent(mock_memory, embedding_client, mock_agent)

        await chat_agent.generate(
            [HumanMessage(content="hi")],
            options(semantic_memory=SemanticMemoryConfig(enabled=False)),
        )

        assert hashing_embeddings.calls == []
        mock_memory.recall_similar.assert_not_awaited()
        assert all(c.kwargs["embedding"] is None for c in mock_memory.add_message.await_args_list)

    @pytest.mark.asyncio
    async def test_generate_should_continue_when_recall_fails(
        self,
        mock_memory,
        embedding_client,
        mock_agent,
    ) -> None:
        mock_memory.recall_similar.side_effect = PersistenceError("no vector support", operation="recall_similar")
        chat_agent = build_agent(mock_memory, embedding_client, mock_agent)

        result = await chat_agent.generate([HumanMessage(content="hi")], options())

        assert result.text == "The sky is blue."

    @pytest.mark.asyncio
    async def test_generate_should_store_message_without_vector_when_embedding_fails(
        self,
        mock_memory,
        mock_agent,
    ) -> None:
        failing_client = AsyncMock()
        failing_client.embed.side_effect = EmbeddingProviderError("quota")
        chat_agent = build_agent(mock_memory, failing_client, mock_agent)

        result = await chat_agent.generate([HumanMessage(content="hi")], options())

        assert result.text == "The sky is blue."
        mock_memory.recall_similar.assert_not_awaited()
        assert [c.kwargs["embedding"] for c in mock_memory.add_message.await_args_list] == [None, None]

    @pytest.mark.asyncio
    async def test_generate_should_not_store_empty_answer(self, mock_memory, embedding_client, mock_agent) -> None:
        mock_agent.ainvoke.return_value = {"messages": [AIMessage(content="")]}
        chat_agent = build_agent(mock_memory, embedding_client, mock_agent)

        result = await chat_agent.generate([HumanMessage(content="hi")], options())

        assert result.text == ""
        assert [c.args[2] for c in mock_memory.add_message.await_args_list] == [MessageRole.USER]


class TestChatAgentWithStoredMemory:
    """ChatAgent over SQLite-backed conversation memory."""

    @pytest.mark.asyncio
    async def test_second_turn_should_see_first_turn(self, test_session_factory, mock_agent) -> None:
        # Arrange
        memory = ConversationMemory(test_session_factory)
        chat_agent = build_agent(memory, None, mock_agent)

        # Act
        await chat_agent.generate([HumanMessage(content="The sky is blue, remember that.")], options())
        await chat_agent.generate([HumanMessage(content="What color is the sky?")], options())

        # Assert
        prompt = mock_agent.ainvoke.await_args.args[0]["messages"]
        assert [m.content for m in prompt] == [
            "The sky is blue, remember that.",
            "The sky is blue.",
            "What color is the sky?",
        ]
        stored = await memory.get_messages("conv_1", "u1")
        assert len(stored) == 4
        conversations = await memory.list_conversations("u1")
        assert conversations[0].title == "The sky is blue, remember that."
