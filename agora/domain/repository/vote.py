"""Vote repository interface (the vote ledger)."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from agora.domain.model.vote import Vote
from agora.domain.value import UserId, VotableId, VotableType, VoteType


class VoteRepository(ABC):
    """Repository for Vote entity.

    The ledger is the source of truth for every post and comment tally.
    """

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_id: VotableId,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            target_type: Type of item (post or comment)
            target_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_ids: Sequence[VotableId],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            target_type: Type of items (post or comment)
            target_ids: List of item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Record a vote.

        If a row already exists for the same user and target it is replaced,
        so the ledger never holds two rows for one pair.

        Args:
            vote: The vote to save

        Returns:
            The saved vote
        """
        pass

    @abstractmethod
    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_id: VotableId,
    ) -> bool:
        """Delete a user's vote on an item.

        Args:
            user_id: The user's ID
            target_type: Type of item (post or comment)
            target_id: ID of the item

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def delete_by_target(
        self,
        target_type: VotableType,
        target_id: VotableId,
    ) -> int:
        """Delete every vote on an item.

        Args:
            target_type: Type of item (post or comment)
            target_id: ID of the item

        Returns:
            Number of deleted votes
        """
        pass

    @abstractmethod
    async def count_by_target(
        self,
        target_type: VotableType,
        target_id: VotableId,
        vote_type: VoteType,
    ) -> int:
        """Count votes of one direction on an item.

        Args:
            target_type: Type of item (post or comment)
            target_id: ID of the item
            vote_type: Direction to count

        Returns:
            Number of matching votes
        """
        pass
