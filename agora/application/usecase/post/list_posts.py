"""List posts use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import CamelModel, PostItem
from agora.domain.service import PostService
from agora.domain.value import UserId


class ListPostsRequest(BaseModel):
    """List posts request."""

    limit: int = Field(default=30, ge=1, le=100)
    viewer_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(CamelModel):
    """List posts response."""

    posts: list[PostItem]
    total: int


class ListPostsUseCase(BaseUseCase[ListPostsRequest, ListPostsResponse]):
    """Use case for listing the most recent posts."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request

        Returns:
            Posts, newest first
        """
        with logfire.span("list_posts.execute", limit=request.limit):
            viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None

            posts = await self.post_service.list_posts(
                viewer_id=viewer_id, limit=request.limit
            )
            items = [PostItem.from_view(post) for post in posts]

            return ListPostsResponse(posts=items, total=len(items))
