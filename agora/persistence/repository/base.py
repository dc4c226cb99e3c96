"""Shared plumbing for the PostgreSQL repositories."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import StorageUnavailableError


class PostgresRepository:
    """Base class for repositories backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @contextmanager
    def _storage(self, operation: str) -> Iterator[None]:
        """Re-raise driver and connection failures as StorageUnavailableError."""
        try:
            yield
        except SQLAlchemyError as e:
            logfire.error("Storage operation failed", operation=operation, error=str(e))
            raise StorageUnavailableError(operation, str(e)) from e
