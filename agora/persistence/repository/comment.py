"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc, func, select, update

from agora.domain.model import Comment
from agora.domain.repository import CommentRepository
from agora.domain.value import CommentId, PostId
from agora.persistence.mappers import comment_to_dict, row_to_comment
from agora.persistence.tables import comments_table

from .base import PostgresRepository


class PostgresCommentRepository(PostgresRepository, CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        with self._storage("loading comment"):
            stmt = select(comments_table).where(comments_table.c.id == comment_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, newest first."""
        with self._storage("loading comments"):
            stmt = (
                select(comments_table)
                .where(comments_table.c.post_id == post_id)
                .order_by(desc(comments_table.c.created_at))
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_comment(row._asdict()) for row in rows]

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct child comments of a parent comment."""
        with self._storage("loading replies"):
            stmt = (
                select(comments_table)
                .where(comments_table.c.parent_id == parent_id)
                .order_by(comments_table.c.created_at)
            )
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_comment(row._asdict()) for row in rows]

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        with self._storage("counting comments"):
            stmt = (
                select(func.count())
                .select_from(comments_table)
                .where(comments_table.c.post_id == post_id)
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        with self._storage("saving comment"):
            stmt = comments_table.insert().values(**comment_to_dict(comment))
            await self.session.execute(stmt)
            await self.session.flush()
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Update the content of a comment."""
        with self._storage("updating comment"):
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment_id)
                .values(content=content, updated_at=datetime.now())
                .returning(comments_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if row is None:
                return None
            await self.session.flush()
        return row_to_comment(row._asdict())

    async def update_votes(self, comment_id: CommentId, votes: int) -> None:
        """Overwrite the vote tally, leaving updated_at alone."""
        with self._storage("updating comment votes"):
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment_id)
                .values(votes=votes)
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment (hard delete)."""
        with self._storage("deleting comment"):
            stmt = comments_table.delete().where(comments_table.c.id == comment_id)
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0  # type: ignore[attr-defined]
