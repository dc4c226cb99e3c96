"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import PostItem
from agora.domain.service import PostService
from agora.domain.value import PostId, UserId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    viewer_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(PostItem):
    """Get post response."""


class GetPostUseCase(BaseUseCase[GetPostRequest, GetPostResponse]):
    """Use case for getting a single post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None

        view = await self.post_service.get_post(
            PostId(UUID(request.post_id)), viewer_id=viewer_id
        )
        return GetPostResponse(**PostItem.from_view(view).model_dump())
