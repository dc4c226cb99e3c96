"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agora.domain.model.post import Post
from agora.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post entity."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 30, offset: int = 0) -> List[Post]:
        """Find posts, newest first.

        Args:
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all posts."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Insert a new post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def update_content(
        self,
        post_id: PostId,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Post]:
        """Update title and/or content and refresh ``updated_at``.

        Args:
            post_id: Post ID
            title: New title (unchanged if None)
            content: New content (unchanged if None)

        Returns:
            The updated post, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def update_votes(self, post_id: PostId, votes: int) -> None:
        """Overwrite the denormalized vote tally without touching ``updated_at``.

        Args:
            post_id: Post ID
            votes: Tally recomputed from the vote ledger
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post.

        Args:
            post_id: The post ID

        Returns:
            True if a post was deleted
        """
        pass
