"""Vote domain service."""

from datetime import datetime
from typing import Sequence
from uuid import UUID, uuid4

import logfire

from agora.domain.error import NotFoundError, ValidationError
from agora.domain.model.vote import Vote
from agora.domain.repository import CommentRepository, PostRepository, VoteRepository
from agora.domain.value import (
    CommentId,
    PostId,
    UserId,
    VotableId,
    VotableType,
    VoteId,
    VoteType,
)

from .base import Service


class VoteService(Service):
    """Domain service for the vote ledger and the tallies derived from it.

    Tallies are recomputed from the ledger after every change instead of
    being incremented, so a retried vote always converges on ledger truth.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository (the ledger)
            post_repository: Post repository, for post tallies
            comment_repository: Comment repository, for comment tallies
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository

    async def vote_on(
        self,
        target_id: VotableId,
        user_id: UserId,
        vote_type: int,
        target_type: VotableType,
    ) -> int:
        """Cast, replace or withdraw a user's vote on a post or comment.

        Any existing vote of the user on the target is deleted first. A
        non-zero ``vote_type`` then records a fresh vote. Toggling is the
        caller's job: this method has no notion of "same vote again".

        Args:
            target_id: Post or comment ID
            user_id: Voting user
            vote_type: 1 (up), -1 (down) or 0 (withdraw)
            target_type: Whether the target is a post or a comment

        Returns:
            The target's new tally

        Raises:
            ValidationError: If vote_type is not -1, 0 or 1
            NotFoundError: If the target doesn't exist
        """
        with logfire.span(
            "vote_service.vote_on",
            target_type=target_type.value,
            target_id=str(target_id),
            user_id=str(user_id),
            vote_type=vote_type,
        ):
            direction = self._parse_vote_type(vote_type)
            await self._ensure_target_exists(target_type, target_id)

            await self.vote_repository.delete_by_user_and_target(
                user_id=user_id,
                target_type=target_type,
                target_id=target_id,
            )

            if direction is not None:
                vote = Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    target_type=target_type,
                    target_id=UUID(str(target_id)),
                    vote_type=direction,
                    created_at=datetime.now(),
                )
                await self.vote_repository.save(vote)

            tally = await self.recompute_tally(target_type, target_id)
            logfire.info(
                "Vote recorded",
                target_type=target_type.value,
                target_id=str(target_id),
                user_id=str(user_id),
                vote_type=vote_type,
                votes=tally,
            )
            return tally

    async def recompute_tally(
        self, target_type: VotableType, target_id: VotableId
    ) -> int:
        """Derive a target's tally from the ledger and store it on the target.

        The denormalized ``votes`` field is overwritten without touching the
        target's ``updated_at``.

        Args:
            target_type: Whether the target is a post or a comment
            target_id: Post or comment ID

        Returns:
            Upvotes minus downvotes
        """
        upvotes = await self.vote_repository.count_by_target(
            target_type, target_id, VoteType.UP
        )
        downvotes = await self.vote_repository.count_by_target(
            target_type, target_id, VoteType.DOWN
        )
        tally = upvotes - downvotes

        if target_type == VotableType.POST:
            await self.post_repository.update_votes(PostId(UUID(str(target_id))), tally)
        else:
            await self.comment_repository.update_votes(
                CommentId(UUID(str(target_id))), tally
            )

        return tally

    async def get_user_vote(
        self,
        target_id: VotableId,
        user_id: UserId,
        target_type: VotableType,
    ) -> int:
        """Get a user's own vote on a target.

        Args:
            target_id: Post or comment ID
            user_id: User ID
            target_type: Whether the target is a post or a comment

        Returns:
            1 or -1 for an existing vote, 0 if the user hasn't voted
        """
        vote = await self.vote_repository.find_by_user_and_target(
            user_id=user_id,
            target_type=target_type,
            target_id=target_id,
        )
        return int(vote.vote_type) if vote else 0

    async def get_user_votes(
        self,
        user_id: UserId,
        target_type: VotableType,
        target_ids: Sequence[VotableId],
    ) -> dict[UUID, int]:
        """Get a user's votes on many targets with one ledger query.

        Args:
            user_id: User ID
            target_type: Whether the targets are posts or comments
            target_ids: Targets to check

        Returns:
            Mapping of target ID to 1, -1 or 0 for every requested ID
        """
        if not target_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_targets(
            user_id=user_id,
            target_type=target_type,
            target_ids=target_ids,
        )
        voted = {UUID(str(vote.target_id)): int(vote.vote_type) for vote in votes}

        return {
            UUID(str(tid)): voted.get(UUID(str(tid)), 0) for tid in target_ids
        }

    async def purge_votes(self, target_type: VotableType, target_id: VotableId) -> int:
        """Delete every vote on a target that is being removed.

        Args:
            target_type: Whether the target is a post or a comment
            target_id: Post or comment ID

        Returns:
            Number of deleted votes
        """
        deleted = await self.vote_repository.delete_by_target(target_type, target_id)
        if deleted:
            logfire.info(
                "Votes purged",
                target_type=target_type.value,
                target_id=str(target_id),
                count=deleted,
            )
        return deleted

    @staticmethod
    def _parse_vote_type(vote_type: int) -> VoteType | None:
        """Map a requested vote value onto a ledger direction (None = withdraw)."""
        if isinstance(vote_type, bool):
            raise ValidationError(f"Invalid vote type: {vote_type!r}")
        if vote_type == 0:
            return None
        try:
            return VoteType(vote_type)
        except ValueError:
            raise ValidationError(
                f"Invalid vote type: {vote_type!r} (expected -1, 0 or 1)"
            )

    async def _ensure_target_exists(
        self, target_type: VotableType, target_id: VotableId
    ) -> None:
        """Raise NotFoundError before touching the ledger for a missing target."""
        if target_type == VotableType.POST:
            target = await self.post_repository.find_by_id(PostId(UUID(str(target_id))))
            resource = "Post"
        else:
            target = await self.comment_repository.find_by_id(
                CommentId(UUID(str(target_id)))
            )
            resource = "Comment"

        if target is None:
            logfire.warn(
                "Vote on non-existent target",
                target_type=target_type.value,
                target_id=str(target_id),
            )
            raise NotFoundError(resource, str(target_id))
