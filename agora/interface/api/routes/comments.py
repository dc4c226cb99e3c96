"""Comment routes.

Comments are listed under their post; replies, edits and deletes address a
comment directly.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import Field

from agora.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    CreateReplyRequest,
    CreateReplyResponse,
    CreateReplyUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from agora.application.usecase.common import CamelModel
from agora.domain.error import DomainError
from agora.domain.service import JWTService
from agora.interface.error import authentication_required, to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CommentAPIRequest(CamelModel):
    """API request carrying comment content."""

    content: str = Field(min_length=1, max_length=10000)


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """Get all comments for a post as a flat list, newest first.

    If authenticated, includes the viewer's vote on each comment.

    Args:
        post_id: Post UUID
        get_comments_use_case: Get comments use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie (optional)

    Returns:
        Flat comment list
    """
    request = GetCommentsRequest(
        post_id=str(post_id),
        viewer_id=jwt_service.get_user_id_from_token(auth_token),
    )
    return await get_comments_use_case.execute(request)


@router.get("/posts/{post_id}/comments/tree", response_model=GetCommentTreeResponse)
async def get_comment_tree(
    post_id: UUID,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCommentTreeResponse:
    """Get the comments of a post as a nested reply tree.

    Args:
        post_id: Post UUID
        get_comment_tree_use_case: Get comment tree use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie (optional)

    Returns:
        Root comments, newest first, each with nested replies and depth
    """
    request = GetCommentTreeRequest(
        post_id=str(post_id),
        viewer_id=jwt_service.get_user_id_from_token(auth_token),
    )
    return await get_comment_tree_use_case.execute(request)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Create a top-level comment on a post.

    Requires authentication.

    Raises:
        HTTPException: If not authenticated, the post is missing, or validation fails
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("create comments")

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=str(post_id), author_id=user_id, content=request.content
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post(
    "/comments/{comment_id}/replies",
    response_model=CreateReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    comment_id: UUID,
    request: CommentAPIRequest,
    create_reply_use_case: FromDishka[CreateReplyUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateReplyResponse:
    """Reply to a comment.

    Requires authentication.

    Raises:
        HTTPException: 404 if the parent is missing, 422 if the thread is
            already at its maximum depth
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("reply to comments")

    try:
        return await create_reply_use_case.execute(
            CreateReplyRequest(
                parent_id=str(comment_id), author_id=user_id, content=request.content
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.patch("/comments/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: UUID,
    request: CommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateCommentResponse:
    """Update a comment's content.

    Only the comment author can edit.

    Raises:
        HTTPException: If not authenticated, not authorized, or validation fails
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("edit comments")

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment_id), user_id=user_id, content=request.content
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and every reply beneath it.

    Only the comment author can delete.

    Raises:
        HTTPException: If not authenticated, not authorized, or the comment is missing
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("delete comments")

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=str(comment_id), user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)
