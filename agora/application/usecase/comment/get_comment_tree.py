"""Get comment tree use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import CamelModel, CommentNodeItem
from agora.domain.service import CommentService, ThreadingService
from agora.domain.value import PostId, UserId


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    post_id: str  # UUID string
    viewer_id: str | None = None  # Current user ID (if authenticated)


class GetCommentTreeResponse(CamelModel):
    """Get comment tree response."""

    post_id: str
    comments: list[CommentNodeItem]  # Root nodes, newest first
    total: int  # Number of comments across the whole tree


class GetCommentTreeUseCase(
    BaseUseCase[GetCommentTreeRequest, GetCommentTreeResponse]
):
    """Use case for getting the nested reply tree of a post."""

    def __init__(
        self, comment_service: CommentService, threading_service: ThreadingService
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
            threading_service: Threading engine, to count the tree's nodes
        """
        self.comment_service = comment_service
        self.threading_service = threading_service

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Args:
            request: Get comment tree request with post ID and optional viewer

        Returns:
            Root nodes with nested replies
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None

        tree = await self.comment_service.get_comment_tree(
            post_id=PostId(UUID(request.post_id)),
            viewer_id=viewer_id,
        )
        total = len(self.threading_service.flatten_comment_tree(tree))

        return GetCommentTreeResponse(
            post_id=request.post_id,
            comments=CommentNodeItem.from_tree(tree),
            total=total,
        )
