"""Update post use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import PostItem
from agora.domain.error import NotAuthorizedError, ValidationError
from agora.domain.service import PostService
from agora.domain.value import PostId, UserId


class UpdatePostRequest(BaseModel):
    """Update post request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    title: Optional[str] = None
    content: Optional[str] = None


class UpdatePostResponse(PostItem):
    """Update post response."""


class UpdatePostUseCase(BaseUseCase[UpdatePostRequest, UpdatePostResponse]):
    """Use case for editing a post's title and/or content."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Args:
            request: Update post request

        Returns:
            Updated post details

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If user doesn't own the post
            ValidationError: If nothing is being changed
        """
        post_id = PostId(UUID(request.post_id))
        user_id = UserId(UUID(request.user_id))

        if request.title is None and request.content is None:
            raise ValidationError("Nothing to update: provide a title or content")

        post = await self.post_service.get_post(post_id, viewer_id=user_id)
        if post.author_id != user_id:
            raise NotAuthorizedError("post", request.post_id, request.user_id)

        await self.post_service.update_post(
            post_id, title=request.title, content=request.content
        )
        updated = await self.post_service.get_post(post_id, viewer_id=user_id)

        return UpdatePostResponse(**PostItem.from_view(updated).model_dump())
