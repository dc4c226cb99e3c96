"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import CommentItem
from agora.domain.service import CommentService
from agora.domain.value import PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    content: str


class CreateCommentResponse(CommentItem):
    """Create comment response."""


class CreateCommentUseCase(BaseUseCase[CreateCommentRequest, CreateCommentResponse]):
    """Use case for creating a top-level comment on a post."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment, enriched with its author

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If the content is invalid
        """
        author_id = UserId(UUID(request.author_id))

        comment = await self.comment_service.create_comment(
            post_id=PostId(UUID(request.post_id)),
            author_id=author_id,
            content=request.content,
        )
        view = await self.comment_service.get_comment(comment.id, viewer_id=author_id)

        return CreateCommentResponse(**CommentItem.from_comment(view).model_dump())
