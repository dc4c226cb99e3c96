"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, desc, func, insert, select, update

from agora.domain.model import Post
from agora.domain.repository import PostRepository
from agora.domain.value import PostId
from agora.persistence.mappers import post_to_dict, row_to_post
from agora.persistence.tables import posts_table

from .base import PostgresRepository


class PostgresPostRepository(PostgresRepository, PostRepository):
    """PostgreSQL implementation of PostRepository."""

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with self._storage("loading post"):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_all(self, limit: int = 30, offset: int = 0) -> List[Post]:
        """Find posts, newest first."""
        with self._storage("listing posts"):
            stmt = (
                select(posts_table)
                .order_by(desc(posts_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_post(row._asdict()) for row in rows]

    async def count(self) -> int:
        """Count all posts."""
        with self._storage("counting posts"):
            stmt = select(func.count()).select_from(posts_table)
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        with self._storage("saving post"):
            stmt = insert(posts_table).values(**post_to_dict(post))
            await self.session.execute(stmt)
            await self.session.flush()
        return post

    async def update_content(
        self,
        post_id: PostId,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Post]:
        """Update title and/or content of a post."""
        values: Dict[str, Any] = {"updated_at": datetime.now()}
        if title is not None:
            values["title"] = title
        if content is not None:
            values["content"] = content

        with self._storage("updating post"):
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(**values)
                .returning(posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if row is None:
                return None
            await self.session.flush()
        return row_to_post(row._asdict())

    async def update_votes(self, post_id: PostId, votes: int) -> None:
        """Overwrite the vote tally, leaving updated_at alone."""
        with self._storage("updating post votes"):
            stmt = update(posts_table).where(posts_table.c.id == post_id).values(votes=votes)
            await self.session.execute(stmt)
            await self.session.flush()

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete)."""
        with self._storage("deleting post"):
            stmt = delete(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0  # type: ignore[attr-defined]
