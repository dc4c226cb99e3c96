"""Async PostgreSQL engine and sessions.

One engine per process, owned by the DI container; one session per request.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from agora.config import Settings

# Reported in pg_stat_activity
APPLICATION_NAME = "agora-backend"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg-backed engine described by ``settings.database``.

    SQL is echoed when ``settings.debug`` is on.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the request session factory.

    Sessions never autoflush and keep loaded rows usable after commit;
    commit and rollback are driven by the request scope in the container.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
