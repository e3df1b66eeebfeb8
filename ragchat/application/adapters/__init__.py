"""
Application adapters.

- ConversationMemory: session-per-call conversation and message storage

Dependencies: ragchat.boundary.db
System role: Persistence adapters for application services
"""

from ragchat.application.adapters.conversation_memory import ConversationMemory, to_langchain_message

__all__ = ["ConversationMemory", "to_langchain_message"]
