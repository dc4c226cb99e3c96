"""Post routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import Field

from agora.application.usecase.common import CamelModel
from agora.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostResponse,
    UpdatePostUseCase,
)
from agora.domain.error import DomainError
from agora.domain.service import JWTService
from agora.interface.error import authentication_required, to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(CamelModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=40000)


class UpdatePostAPIRequest(CamelModel):
    """API request for updating a post."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    content: Optional[str] = Field(default=None, min_length=1, max_length=40000)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=30, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List the most recent posts.

    If authenticated, includes the viewer's vote on each post.

    Args:
        list_posts_use_case: List posts use case from DI
        jwt_service: JWT service for token verification (injected)
        limit: Maximum number of posts
        auth_token: JWT token from cookie (optional)

    Returns:
        Posts, newest first
    """
    request = ListPostsRequest(
        limit=limit, viewer_id=jwt_service.get_user_id_from_token(auth_token)
    )
    return await list_posts_use_case.execute(request)


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication.

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("create posts")

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                author_id=user_id, title=request.title, content=request.content
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a single post.

    Raises:
        HTTPException: 404 if the post doesn't exist
    """
    try:
        return await get_post_use_case.execute(
            GetPostRequest(
                post_id=str(post_id),
                viewer_id=jwt_service.get_user_id_from_token(auth_token),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.patch("/{post_id}", response_model=UpdatePostResponse)
async def update_post(
    post_id: UUID,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdatePostResponse:
    """Update a post's title and/or content.

    Only the post author can edit.

    Raises:
        HTTPException: If not authenticated, not authorized, or validation fails
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("edit posts")

    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=str(post_id),
                user_id=user_id,
                title=request.title,
                content=request.content,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    """Delete a post together with its comments and votes.

    Only the post author can delete.

    Raises:
        HTTPException: If not authenticated, not authorized, or the post is missing
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise authentication_required("delete posts")

    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=str(post_id), user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)
