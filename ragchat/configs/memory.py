"""
Conversation memory configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Conversation history and semantic recall configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class MemorySettings(BaseSettings):
    """Conversation memory and semantic recall settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MEMORY_",
        case_sensitive=False,
        extra="ignore",
    )

    user_id: str = Field(default="default-user", description="Owner of all conversations")
    history_limit: int = Field(default=50, description="Messages returned by history listing")
    conversation_limit: int = Field(default=50, description="Conversations returned by listing")
    context_window: int = Field(default=10, description="Recent messages sent to the model")

    semantic_enabled: bool = Field(default=True, description="Enable semantic recall of prior turns")
    semantic_limit: int = Field(default=10, description="Maximum recalled messages")
    semantic_threshold: float = Field(
        default=0.6,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity for recalled messages",
    )
