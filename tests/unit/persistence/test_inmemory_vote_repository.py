"""Unit tests for the in-memory vote ledger."""

from datetime import datetime
from uuid import uuid4

import pytest

from agora.domain.model import Vote
from agora.domain.value import UserId, VotableType, VoteId, VoteType
from agora.persistence.repository.inmemory import InMemoryVoteRepository


def _vote(user_id, target_id, vote_type=VoteType.UP, target_type=VotableType.POST):
    return Vote(
        id=VoteId(uuid4()),
        user_id=user_id,
        target_type=target_type,
        target_id=target_id,
        vote_type=vote_type,
        created_at=datetime.now(),
    )


class TestInMemoryVoteRepository:
    """Tests for the one-vote-per-user-per-target ledger."""

    @pytest.mark.asyncio
    async def test_save_replaces_existing_vote(self):
        """A second save by the same user on the same target replaces the first."""
        # Arrange
        repo = InMemoryVoteRepository()
        user_id, target_id = UserId(uuid4()), uuid4()

        # Act
        await repo.save(_vote(user_id, target_id, VoteType.UP))
        await repo.save(_vote(user_id, target_id, VoteType.DOWN))

        # Assert
        stored = await repo.find_by_user_and_target(user_id, VotableType.POST, target_id)
        assert stored.vote_type == VoteType.DOWN
        assert await repo.count_by_target(VotableType.POST, target_id, VoteType.UP) == 0
        assert (
            await repo.count_by_target(VotableType.POST, target_id, VoteType.DOWN) == 1
        )

    @pytest.mark.asyncio
    async def test_target_types_are_separate(self):
        """A post and a comment sharing an id don't share votes."""
        repo = InMemoryVoteRepository()
        user_id, target_id = UserId(uuid4()), uuid4()

        await repo.save(_vote(user_id, target_id, target_type=VotableType.POST))

        assert (
            await repo.find_by_user_and_target(user_id, VotableType.COMMENT, target_id)
            is None
        )

    @pytest.mark.asyncio
    async def test_delete_by_user_and_target(self):
        """Deleting reports whether a vote existed."""
        repo = InMemoryVoteRepository()
        user_id, target_id = UserId(uuid4()), uuid4()
        await repo.save(_vote(user_id, target_id))

        assert await repo.delete_by_user_and_target(user_id, VotableType.POST, target_id)
        assert not await repo.delete_by_user_and_target(
            user_id, VotableType.POST, target_id
        )

    @pytest.mark.asyncio
    async def test_batch_lookup_ignores_other_users(self):
        """Batch lookups only return the given user's votes."""
        # Arrange
        repo = InMemoryVoteRepository()
        me, other = UserId(uuid4()), UserId(uuid4())
        first, second = uuid4(), uuid4()
        await repo.save(_vote(me, first))
        await repo.save(_vote(other, second))

        # Act
        votes = await repo.find_by_user_and_targets(me, VotableType.POST, [first, second])

        # Assert
        assert [vote.target_id for vote in votes] == [first]
