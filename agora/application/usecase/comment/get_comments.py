"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import CamelModel, CommentItem
from agora.domain.service import CommentService
from agora.domain.value import PostId, UserId


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string
    viewer_id: str | None = None  # Current user ID (if authenticated)


class GetCommentsResponse(CamelModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase(BaseUseCase[GetCommentsRequest, GetCommentsResponse]):
    """Use case for listing every comment of a post, flat and newest first."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request with post ID and optional viewer

        Returns:
            Flat comment list with the viewer's vote on each comment
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None

        comments = await self.comment_service.get_comments_by_post_with_user_votes(
            post_id=PostId(UUID(request.post_id)),
            viewer_id=viewer_id,
        )
        items = [CommentItem.from_comment(comment) for comment in comments]

        return GetCommentsResponse(
            post_id=request.post_id, comments=items, total=len(items)
        )
