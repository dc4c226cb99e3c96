"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import StrictInt

from agora.application.usecase.common import CamelModel
from agora.application.usecase.vote import VoteRequest, VoteResponse, VoteUseCase
from agora.domain.error import DomainError
from agora.domain.service import JWTService
from agora.domain.value import VotableType
from agora.interface.error import authentication_required, to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(CamelModel):
    """API request for casting a vote: ``{"voteType": -1 | 0 | 1}``."""

    vote_type: StrictInt


async def _vote(
    target_type: VotableType,
    target_id: UUID,
    request: VoteAPIRequest,
    vote_use_case: VoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> VoteResponse:
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("vote")

    try:
        return await vote_use_case.execute(
            VoteRequest(
                target_type=target_type,
                target_id=str(target_id),
                user_id=user_id,
                vote_type=request.vote_type,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/posts/{post_id}/vote", response_model=VoteResponse)
async def vote_post(
    post_id: UUID,
    request: VoteAPIRequest,
    vote_use_case: FromDishka[VoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Vote on a post.

    Requires authentication. Sending the vote the user already holds
    withdraws it.

    Args:
        post_id: Post UUID
        request: Vote direction
        vote_use_case: Vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The post's new tally and the user's resulting vote
    """
    return await _vote(
        VotableType.POST, post_id, request, vote_use_case, jwt_service, auth_token
    )


@router.post("/comments/{comment_id}/vote", response_model=VoteResponse)
async def vote_comment(
    comment_id: UUID,
    request: VoteAPIRequest,
    vote_use_case: FromDishka[VoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Vote on a comment.

    Requires authentication. Sending the vote the user already holds
    withdraws it.

    Returns:
        The comment's new tally and the user's resulting vote
    """
    return await _vote(
        VotableType.COMMENT,
        comment_id,
        request,
        vote_use_case,
        jwt_service,
        auth_token,
    )
