"""In-memory post repository for testing."""

from datetime import datetime
from typing import Any, Optional

from agora.domain.model.post import Post
from agora.domain.repository.post import PostRepository
from agora.domain.value import PostId

from .store import InMemoryStore


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _posts(self) -> dict[PostId, Post]:
        return self._store.posts

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(self, limit: int = 30, offset: int = 0) -> list[Post]:
        """Find posts, newest first."""
        posts = sorted(self._posts.values(), key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def count(self) -> int:
        """Count all posts."""
        return len(self._posts)

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        self._posts[post.id] = post
        return post

    async def update_content(
        self,
        post_id: PostId,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Post]:
        """Update title and/or content of a post."""
        post = self._posts.get(post_id)
        if post is None:
            return None

        changes: dict[str, Any] = {"updated_at": datetime.now()}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content

        updated = post.evolve(**changes)
        self._posts[post_id] = updated
        return updated

    async def update_votes(self, post_id: PostId, votes: int) -> None:
        """Overwrite the vote tally, leaving updated_at alone."""
        post = self._posts.get(post_id)
        if post is not None:
            self._posts[post_id] = post.evolve(votes=votes)

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None
