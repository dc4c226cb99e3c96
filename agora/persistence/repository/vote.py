"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert

from agora.domain.model import Vote
from agora.domain.repository import VoteRepository
from agora.domain.value import UserId, VotableId, VotableType, VoteType
from agora.persistence.mappers import row_to_vote, vote_to_dict
from agora.persistence.tables import votes_table

from .base import PostgresRepository


class PostgresVoteRepository(PostgresRepository, VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_id: VotableId,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        with self._storage("loading vote"):
            stmt = select(votes_table).where(
                and_(
                    votes_table.c.user_id == user_id,
                    votes_table.c.target_type == target_type.value,
                    votes_table.c.target_id == target_id,
                )
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_ids: Sequence[VotableId],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not target_ids:
            return []

        with self._storage("loading votes"):
            stmt = select(votes_table).where(
                and_(
                    votes_table.c.user_id == user_id,
                    votes_table.c.target_type == target_type.value,
                    votes_table.c.target_id.in_(target_ids),
                )
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_vote(row._asdict()) for row in rows]

    async def save(self, vote: Vote) -> Vote:
        """Record a vote, replacing the user's existing one on the target.

        Concurrent votes by the same user land on the ``unique_vote``
        constraint and the later one wins instead of failing.
        """
        vote_dict = vote_to_dict(vote)
        with self._storage("saving vote"):
            stmt = (
                insert(votes_table)
                .values(**vote_dict)
                .on_conflict_do_update(
                    constraint="unique_vote",
                    set_={
                        "id": vote_dict["id"],
                        "vote_type": vote_dict["vote_type"],
                        "created_at": vote_dict["created_at"],
                    },
                )
            )
            await self.session.execute(stmt)
            await self.session.flush()
        return vote

    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_id: VotableId,
    ) -> bool:
        """Delete a vote by user and target."""
        with self._storage("deleting vote"):
            stmt = delete(votes_table).where(
                and_(
                    votes_table.c.user_id == user_id,
                    votes_table.c.target_type == target_type.value,
                    votes_table.c.target_id == target_id,
                )
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_target(
        self,
        target_type: VotableType,
        target_id: VotableId,
    ) -> int:
        """Delete every vote on a target."""
        with self._storage("purging votes"):
            stmt = delete(votes_table).where(
                and_(
                    votes_table.c.target_type == target_type.value,
                    votes_table.c.target_id == target_id,
                )
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount  # type: ignore[attr-defined]

    async def count_by_target(
        self,
        target_type: VotableType,
        target_id: VotableId,
        vote_type: VoteType,
    ) -> int:
        """Count votes of one direction on a target."""
        with self._storage("counting votes"):
            stmt = (
                select(func.count())
                .select_from(votes_table)
                .where(
                    and_(
                        votes_table.c.target_type == target_type.value,
                        votes_table.c.target_id == target_id,
                        votes_table.c.vote_type == int(vote_type),
                    )
                )
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0
