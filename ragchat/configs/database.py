"""
Database configuration settings.

Manages PostgreSQL connection parameters for the async SQLAlchemy engine
shared by the vector store and the conversation memory.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(
        default=None,
        description="Full connection URL; overrides the individual fields when set",
    )
    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="ragchat", description="PostgreSQL database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    sslmode: str = Field(default="disable", description="SSL mode (disable, require)")

    @property
    def async_database_url(self) -> str:
        """
        Construct async PostgreSQL connection URL.

        A plain ``postgresql://`` URL given in ``url`` is rewritten to the
        asyncpg driver.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        if self.url:
            if self.url.startswith("postgresql://"):
                return "postgresql+asyncpg://" + self.url[len("postgresql://"):]
            if self.url.startswith("postgres://"):
                return "postgresql+asyncpg://" + self.url[len("postgres://"):]
            return self.url

        ssl_param = "?ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{ssl_param}"
        )
