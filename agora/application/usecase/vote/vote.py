"""Vote use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import CamelModel
from agora.domain.service import VoteService
from agora.domain.value import UserId, VotableType


class VoteRequest(BaseModel):
    """Vote request."""

    target_type: VotableType
    target_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    vote_type: int  # 1 (up), -1 (down) or 0 (withdraw)


class VoteResponse(CamelModel):
    """Vote response."""

    target_type: VotableType
    target_id: str
    votes: int  # The target's new tally
    user_vote: int  # The user's vote after this request


class VoteUseCase(BaseUseCase[VoteRequest, VoteResponse]):
    """Use case for voting on a post or comment.

    Repeating the vote the user already holds withdraws it, so a client can
    bind the same action to a toggle button.
    """

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: VoteRequest) -> VoteResponse:
        """Execute vote flow.

        Args:
            request: Vote request

        Returns:
            New tally and the user's resulting vote

        Raises:
            ValidationError: If vote_type is not -1, 0 or 1
            NotFoundError: If the target doesn't exist
        """
        user_id = UserId(UUID(request.user_id))
        target_id = UUID(request.target_id)

        effective = request.vote_type
        if effective != 0:
            current = await self.vote_service.get_user_vote(
                target_id, user_id, request.target_type
            )
            if current == effective:
                logfire.info(
                    "Repeated vote toggles off",
                    target_type=request.target_type.value,
                    target_id=request.target_id,
                    user_id=request.user_id,
                )
                effective = 0

        votes = await self.vote_service.vote_on(
            target_id, user_id, effective, request.target_type
        )

        return VoteResponse(
            target_type=request.target_type,
            target_id=request.target_id,
            votes=votes,
            user_vote=effective,
        )
