"""
Application services.

- ChatService: ingestion, RAG chat and history flows

Dependencies: ragchat.application, ragchat.core
System role: Service layer behind the HTTP routers
"""

from ragchat.application.services.chat_service import ChatService

__all__ = ["ChatService"]
