"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import CamelModel
from agora.domain.error import NotAuthorizedError
from agora.domain.service import PostService
from agora.domain.value import PostId, UserId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeletePostResponse(CamelModel):
    """Delete post response."""

    post_id: str
    comments_removed: int


class DeletePostUseCase(BaseUseCase[DeletePostRequest, DeletePostResponse]):
    """Use case for deleting a post with all of its comments and votes."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If user doesn't own the post
        """
        post_id = PostId(UUID(request.post_id))

        post = await self.post_service.get_post_by_id(post_id)
        if post is not None and str(post.author_id) != request.user_id:
            raise NotAuthorizedError("post", request.post_id, request.user_id)

        removed = await self.post_service.delete_post(post_id)
        return DeletePostResponse(post_id=request.post_id, comments_removed=removed)
