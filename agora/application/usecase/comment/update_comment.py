"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import CommentItem
from agora.domain.error import NotAuthorizedError
from agora.domain.service import CommentService
from agora.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    content: str  # New content (required, cannot be empty)


class UpdateCommentResponse(CommentItem):
    """Update comment response."""


class UpdateCommentUseCase(BaseUseCase[UpdateCommentRequest, UpdateCommentResponse]):
    """Use case for editing a comment's content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request with comment ID, user ID, and new content

        Returns:
            Updated comment details

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If user doesn't own the comment
            ValidationError: If the new content is invalid
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        comment = await self.comment_service.get_comment(comment_id, viewer_id=user_id)
        if comment.author_id != user_id:
            raise NotAuthorizedError("comment", request.comment_id, request.user_id)

        await self.comment_service.update_comment(comment_id, request.content)
        updated = await self.comment_service.get_comment(comment_id, viewer_id=user_id)

        return UpdateCommentResponse(**CommentItem.from_comment(updated).model_dump())
