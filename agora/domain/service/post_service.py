"""Post domain service."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from agora.domain.error import NotFoundError, StorageUnavailableError, ValidationError
from agora.domain.model import Post, PostView
from agora.domain.repository import PostRepository
from agora.domain.value import PostId, UserId, VotableType

from .base import Service
from .comment_service import CommentService
from .user_service import UserService
from .vote_service import VoteService


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        comment_service: CommentService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            comment_service: Comment service, for counts and cascade deletes
            vote_service: Vote service for the viewer's votes
            user_service: User service for author lookup
        """
        self.post_repository = post_repository
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def create_post(self, author_id: UserId, title: str, content: str) -> Post:
        """Create a post.

        Args:
            author_id: Author user ID
            title: Post title
            content: Post body

        Returns:
            Created post

        Raises:
            NotFoundError: If the author doesn't exist
            ValidationError: If title or content is empty
        """
        with logfire.span(
            "post_service.create_post", author_id=str(author_id), title=title
        ):
            if not title.strip() or not content.strip():
                raise ValidationError("Post title and content are required")

            # Resolves or raises NotFoundError
            await self.user_service.get_author(author_id)

            now = datetime.now()
            post = Post(
                id=PostId(uuid4()),
                title=title,
                content=content,
                author_id=author_id,
                votes=0,
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id), author_id=str(author_id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a bare post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
            return post

    async def get_post(
        self, post_id: PostId, viewer_id: Optional[UserId] = None
    ) -> PostView:
        """Get a post enriched for the viewer.

        Args:
            post_id: Post ID
            viewer_id: Requesting user, None for anonymous viewers

        Returns:
            Enriched post

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))

        views = await self._enrich([post], viewer_id)
        return views[0]

    async def list_posts(
        self, viewer_id: Optional[UserId] = None, limit: int = 30
    ) -> list[PostView]:
        """List the most recent posts, newest first.

        Degrades to an empty list when the store is unavailable.

        Args:
            viewer_id: Requesting user, None for anonymous viewers
            limit: Maximum number of posts

        Returns:
            Enriched posts
        """
        with logfire.span("post_service.list_posts", limit=limit):
            try:
                posts = await self.post_repository.find_all(limit=limit)
                return await self._enrich(posts, viewer_id)
            except StorageUnavailableError as e:
                logfire.error("Failed to list posts", error=str(e))
                return []

    async def update_post(
        self,
        post_id: PostId,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Post:
        """Update a post's title and/or content.

        Args:
            post_id: Post ID
            title: New title (unchanged if None)
            content: New content (unchanged if None)

        Returns:
            Updated post

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If a provided field is empty
        """
        with logfire.span("post_service.update_post", post_id=str(post_id)):
            if title is not None and not title.strip():
                raise ValidationError("Post title cannot be empty")
            if content is not None and not content.strip():
                raise ValidationError("Post content cannot be empty")

            updated = await self.post_repository.update_content(
                post_id, title=title, content=content
            )
            if updated is None:
                logfire.warn("Post not found for update", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            logfire.info("Post updated", post_id=str(post_id))
            return updated

    async def delete_post(self, post_id: PostId) -> int:
        """Delete a post, its comments and every vote on them.

        Args:
            post_id: Post ID

        Returns:
            Number of comments removed with the post

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                raise NotFoundError("Post", str(post_id))

            removed = await self.comment_service.delete_comments_for_post(post_id)
            await self.vote_service.purge_votes(VotableType.POST, post_id)
            await self.post_repository.delete(post_id)

            logfire.info("Post deleted", post_id=str(post_id), comments_removed=removed)
            return removed

    async def _enrich(
        self, posts: Sequence[Post], viewer_id: Optional[UserId]
    ) -> list[PostView]:
        if not posts:
            return []

        authors = await self.user_service.get_authors(post.author_id for post in posts)

        user_votes: dict = {}
        if viewer_id is not None:
            user_votes = await self.vote_service.get_user_votes(
                user_id=viewer_id,
                target_type=VotableType.POST,
                target_ids=[post.id for post in posts],
            )

        views = []
        for post in posts:
            comment_count = await self.comment_service.count_by_post(post.id)
            views.append(
                PostView(
                    **post.model_dump(),
                    author=authors[post.author_id],
                    user_vote=user_votes.get(post.id, 0),
                    comment_count=comment_count,
                )
            )
        return views
