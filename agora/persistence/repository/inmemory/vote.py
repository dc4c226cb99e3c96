"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from agora.domain.model.vote import Vote
from agora.domain.repository.vote import VoteRepository
from agora.domain.value import UserId, VotableId, VotableType, VoteType

from .store import InMemoryStore


def _key(
    user_id: UserId, target_type: VotableType, target_id: VotableId
) -> tuple[UUID, str, UUID]:
    return (UUID(str(user_id)), target_type.value, UUID(str(target_id)))


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _votes(self) -> dict[tuple[UUID, str, UUID], Vote]:
        return self._store.votes

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_id: VotableId,
    ) -> Optional[Vote]:
        """Find a vote by user and target."""
        return self._votes.get(_key(user_id, target_type, target_id))

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_ids: Sequence[VotableId],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not target_ids:
            return []

        target_uuids = {UUID(str(tid)) for tid in target_ids}
        return [
            v
            for v in self._votes.values()
            if v.user_id == user_id
            and v.target_type == target_type
            and v.target_id in target_uuids
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote, replacing the user's existing one on the target."""
        self._votes[_key(vote.user_id, vote.target_type, vote.target_id)] = vote
        return vote

    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_id: VotableId,
    ) -> bool:
        """Delete a vote by user and target."""
        return self._votes.pop(_key(user_id, target_type, target_id), None) is not None

    async def delete_by_target(
        self,
        target_type: VotableType,
        target_id: VotableId,
    ) -> int:
        """Delete every vote on a target."""
        target_uuid = UUID(str(target_id))
        keys = [
            key
            for key, v in self._votes.items()
            if v.target_type == target_type and v.target_id == target_uuid
        ]
        for key in keys:
            del self._votes[key]
        return len(keys)

    async def count_by_target(
        self,
        target_type: VotableType,
        target_id: VotableId,
        vote_type: VoteType,
    ) -> int:
        """Count votes of one direction on a target."""
        target_uuid = UUID(str(target_id))
        return sum(
            1
            for v in self._votes.values()
            if v.target_type == target_type
            and v.target_id == target_uuid
            and v.vote_type == vote_type
        )
