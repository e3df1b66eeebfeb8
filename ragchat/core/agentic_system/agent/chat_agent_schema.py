"""
Chat agent request/response schemas.

Dependencies: pydantic
System role: Agent option and result definitions
"""

from pydantic import BaseModel, Field


class SemanticMemoryConfig(BaseModel):
    """Semantic recall of earlier messages in the same conversation."""

    enabled: bool = Field(default=True, description="Recall related earlier messages")
    semantic_limit: int = Field(default=10, ge=0, description="Maximum recalled messages")
    semantic_threshold: float = Field(
        default=0.6,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity of a recalled message",
    )


class GenerateOptions(BaseModel):
    """Per-call options for ChatAgent.generate()."""

    user_id: str = Field(description="Owner of the conversation")
    conversation_id: str = Field(description="Conversation the turn belongs to")
    semantic_memory: SemanticMemoryConfig = Field(default_factory=SemanticMemoryConfig)
    history_limit: int = Field(default=10, ge=0, description="Recent messages sent to the model")


class GenerationResult(BaseModel):
    """Final assistant text of one turn."""

    text: str = Field(default="", description="Assistant answer; empty if the model said nothing")
