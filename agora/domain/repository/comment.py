"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agora.domain.model.comment import Comment
from agora.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Stores comments as a flat collection keyed by id. Implementations must
    never materialize the reply tree.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find every comment of a post in a single query.

        Args:
            post_id: The post ID

        Returns:
            All comments of the post, newest first
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment.

        Args:
            parent_id: The parent comment ID

        Returns:
            List of child comments
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post.

        Args:
            post_id: The post ID

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace a comment's content and refresh ``updated_at``.

        Args:
            comment_id: Comment ID
            content: New content

        Returns:
            The updated comment, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def update_votes(self, comment_id: CommentId, votes: int) -> None:
        """Overwrite the denormalized vote tally.

        Must leave ``updated_at`` untouched.

        Args:
            comment_id: Comment ID
            votes: Tally recomputed from the vote ledger
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a single comment (hard delete, no cascade).

        Args:
            comment_id: The comment ID to delete

        Returns:
            True if a comment was deleted
        """
        pass
