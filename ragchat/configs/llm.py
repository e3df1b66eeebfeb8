"""
Language model configuration settings.

Chat model selection and tool credentials.

Dependencies: pydantic, pydantic_settings
System role: Generation model configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Chat model and tool configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(default="gemini-2.5-flash", description="Google Gemini chat model ID")
    temperature: float = Field(default=0.0, description="Model temperature")

    weather_api_key: str | None = Field(default=None, description="weatherapi.com API key")
    weather_api_url: str = Field(
        default="http://api.weatherapi.com/v1/current.json",
        description="Current weather endpoint",
    )
    weather_timeout: float = Field(default=10.0, description="Weather request timeout in seconds")
