"""FastAPI dependencies."""

from ragchat.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_service_cache,
    get_session_factory,
    get_vector_store_dependency,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_service_cache",
    "get_session_factory",
    "get_vector_store_dependency",
]
