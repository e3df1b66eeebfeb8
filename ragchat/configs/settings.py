"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from ragchat.configs.base import BaseSettings
from ragchat.configs.database import DatabaseSettings
from ragchat.configs.llm import LLMSettings
from ragchat.configs.memory import MemorySettings
from ragchat.configs.rag import RagSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    rag: RagSettings = RagSettings()
    llm: LLMSettings = LLMSettings()
    memory: MemorySettings = MemorySettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from ragchat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
