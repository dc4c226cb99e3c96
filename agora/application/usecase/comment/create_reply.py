"""Create reply use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import CommentItem
from agora.domain.service import CommentService
from agora.domain.value import CommentId, UserId


class CreateReplyRequest(BaseModel):
    """Create reply request."""

    parent_id: str  # Comment being replied to
    author_id: str  # User ID from authenticated user
    content: str


class CreateReplyResponse(CommentItem):
    """Create reply response."""


class CreateReplyUseCase(BaseUseCase[CreateReplyRequest, CreateReplyResponse]):
    """Use case for replying to an existing comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create reply use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateReplyRequest) -> CreateReplyResponse:
        """Execute create reply flow.

        The reply is attached to the parent's post.

        Args:
            request: Create reply request

        Returns:
            The created reply, enriched with its author

        Raises:
            ParentNotFoundError: If the parent comment doesn't exist
            DepthExceededError: If the thread is already too deep
            ValidationError: If the content is invalid
        """
        author_id = UserId(UUID(request.author_id))

        reply = await self.comment_service.create_reply(
            parent_id=CommentId(UUID(request.parent_id)),
            author_id=author_id,
            content=request.content,
        )
        view = await self.comment_service.get_comment(reply.id, viewer_id=author_id)

        return CreateReplyResponse(**CommentItem.from_comment(view).model_dump())
