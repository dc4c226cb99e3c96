"""Create post use case."""

from uuid import UUID

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.common import PostItem
from agora.domain.service import PostService
from agora.domain.value import UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # User ID from authenticated user
    title: str
    content: str


class CreatePostResponse(PostItem):
    """Create post response."""


class CreatePostUseCase(BaseUseCase[CreatePostRequest, CreatePostResponse]):
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            The created post

        Raises:
            NotFoundError: If the author doesn't exist
            ValidationError: If title or content is invalid
        """
        author_id = UserId(UUID(request.author_id))

        post = await self.post_service.create_post(
            author_id=author_id, title=request.title, content=request.content
        )
        view = await self.post_service.get_post(post.id, viewer_id=author_id)

        return CreatePostResponse(**PostItem.from_view(view).model_dump())
