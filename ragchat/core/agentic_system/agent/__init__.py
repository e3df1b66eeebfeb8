"""
Chat agent package.

Dependencies: langchain, langchain_google_genai
System role: Conversational agent with tools and memory
"""

from ragchat.core.agentic_system.agent.chat_agent import ChatAgent
from ragchat.core.agentic_system.agent.chat_agent_schema import (
    GenerateOptions,
    GenerationResult,
    SemanticMemoryConfig,
)

__all__ = ["ChatAgent", "GenerateOptions", "GenerationResult", "SemanticMemoryConfig"]
