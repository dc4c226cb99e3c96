"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from agora.domain.model.comment import Comment
from agora.domain.repository.comment import CommentRepository
from agora.domain.value import CommentId, PostId

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _comments(self) -> dict[CommentId, Comment]:
        return self._store.comments

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, newest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        return sorted(comments, key=lambda c: c.created_at, reverse=True)

    async def find_children(self, parent_id: CommentId) -> list[Comment]:
        """Find direct child comments of a parent comment."""
        children = [c for c in self._comments.values() if c.parent_id == parent_id]
        return sorted(children, key=lambda c: c.created_at)

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        return sum(1 for c in self._comments.values() if c.post_id == post_id)

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Update the content of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.evolve(content=content, updated_at=datetime.now())
        self._comments[comment_id] = updated
        return updated

    async def update_votes(self, comment_id: CommentId, votes: int) -> None:
        """Overwrite the vote tally, leaving updated_at alone."""
        comment = self._comments.get(comment_id)
        if comment is not None:
            self._comments[comment_id] = comment.evolve(votes=votes)

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment."""
        return self._comments.pop(comment_id, None) is not None
