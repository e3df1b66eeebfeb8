"""
Database connection management.

Builds the async SQLAlchemy engine and session factory. The application
creates one engine at startup and passes the session factory explicitly to
every component that needs the store; each call opens and releases its own
session.

Dependencies: sqlalchemy, asyncpg, ragchat.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from ragchat.configs.database import DatabaseSettings


def create_engine_from_settings(db_config: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early.

    Args:
        db_config: Database settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = create_engine_from_settings(get_settings().database)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory bound to ``engine``.

    autoflush=False and expire_on_commit=False keep transaction control
    explicit and let returned rows be read after commit.

    Usage:
        SessionFactory = create_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
