"""PostgreSQL implementation of User repository."""

from typing import List, Optional, Sequence

from sqlalchemy import select

from agora.domain.model import User
from agora.domain.repository import UserRepository
from agora.domain.value import UserId
from agora.persistence.mappers import row_to_user, user_to_dict
from agora.persistence.tables import users_table

from .base import PostgresRepository


class PostgresUserRepository(PostgresRepository, UserRepository):
    """PostgreSQL implementation of UserRepository."""

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        with self._storage("loading user"):
            stmt = select(users_table).where(users_table.c.id == user_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users with one query."""
        if not user_ids:
            return []

        with self._storage("loading users"):
            stmt = select(users_table).where(users_table.c.id.in_(user_ids))
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_user(dict(row)) for row in rows]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        user_dict = user_to_dict(user)

        existing = await self.find_by_id(user.id)
        with self._storage("saving user"):
            if existing:
                stmt = (
                    users_table.update()
                    .where(users_table.c.id == user.id)
                    .values(**user_dict)
                )
            else:
                stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)
            await self.session.flush()
        return user
