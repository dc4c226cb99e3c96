"""Comment domain service."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from agora.domain.error import (
    DepthExceededError,
    NotFoundError,
    ParentNotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from agora.domain.model import Comment, CommentView
from agora.domain.repository import CommentRepository, PostRepository
from agora.domain.value import CommentId, PostId, UserId, VotableType

from .base import Service
from .threading_service import CommentTreeNode, ThreadingService
from .user_service import UserService
from .vote_service import VoteService

MAX_CONTENT_LENGTH = 10000


class CommentService(Service):
    """Domain service for comment operations.

    Composes the flat comment store with author lookup, the viewer's votes
    and the threading engine.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_service: UserService,
        vote_service: VoteService,
        threading_service: ThreadingService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository, to check posts exist
            user_service: User service for author lookup
            vote_service: Vote service for the viewer's votes
            threading_service: Threading engine
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.user_service = user_service
        self.vote_service = vote_service
        self.threading_service = threading_service

    async def get_comments_by_post_with_user_votes(
        self, post_id: PostId, viewer_id: Optional[UserId] = None
    ) -> list[CommentView]:
        """Get every comment of a post, enriched, newest first.

        A storage failure degrades to an empty list so a broken thread
        doesn't break the whole post view. The failure is logged.

        Args:
            post_id: Post ID
            viewer_id: Requesting user, None for anonymous viewers

        Returns:
            Flat list of enriched comments
        """
        with logfire.span(
            "comment_service.get_comments_by_post_with_user_votes",
            post_id=str(post_id),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            try:
                comments = await self.comment_repository.find_by_post(post_id)
                views = await self._enrich(comments, viewer_id)
            except StorageUnavailableError as e:
                logfire.error(
                    "Failed to load comments", post_id=str(post_id), error=str(e)
                )
                return []

            logfire.info(
                "Comments retrieved for post", post_id=str(post_id), count=len(views)
            )
            return views

    async def get_comment_tree(
        self, post_id: PostId, viewer_id: Optional[UserId] = None
    ) -> list[CommentTreeNode]:
        """Get the reply tree of a post.

        Loads the whole flat set in one query, then assembles it in memory.
        Degrades to an empty list on storage failure, like the flat read.

        Args:
            post_id: Post ID
            viewer_id: Requesting user, None for anonymous viewers

        Returns:
            Root nodes, newest first
        """
        with logfire.span(
            "comment_service.get_comment_tree",
            post_id=str(post_id),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            try:
                comments = await self.comment_repository.find_by_post(post_id)
                views = await self._enrich(comments, viewer_id)
            except StorageUnavailableError as e:
                logfire.error(
                    "Failed to load comment tree", post_id=str(post_id), error=str(e)
                )
                return []

            return self.threading_service.build_comment_tree(views)

    async def get_comment(
        self, comment_id: CommentId, viewer_id: Optional[UserId] = None
    ) -> CommentView:
        """Get a single enriched comment.

        Args:
            comment_id: Comment ID
            viewer_id: Requesting user, None for anonymous viewers

        Returns:
            The enriched comment

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            views = await self._enrich([comment], viewer_id)
            return views[0]

    async def create_comment(
        self, post_id: PostId, author_id: UserId, content: str
    ) -> Comment:
        """Create a top-level comment on a post.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If the content is empty or too long
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
        ):
            self._validate_content(content)

            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Comment on non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            saved = await self._insert(post_id, author_id, content, parent_id=None)
            logfire.info(
                "Comment created", comment_id=str(saved.id), post_id=str(post_id)
            )
            return saved

    async def create_reply(
        self, parent_id: CommentId, author_id: UserId, content: str
    ) -> Comment:
        """Reply to an existing comment.

        The reply inherits the parent's post. Depth is validated against a
        fresh load of the post's comments taken right before the insert.

        Args:
            parent_id: Comment being replied to
            author_id: Author user ID
            content: Reply text

        Returns:
            Created reply

        Raises:
            ParentNotFoundError: If the parent comment doesn't exist
            DepthExceededError: If the reply would nest too deep
            ValidationError: If the content is empty or too long
        """
        with logfire.span(
            "comment_service.create_reply",
            parent_id=str(parent_id),
            author_id=str(author_id),
        ):
            self._validate_content(content)

            parent = await self.comment_repository.find_by_id(parent_id)
            if parent is None:
                logfire.warn("Reply to non-existent comment", parent_id=str(parent_id))
                raise ParentNotFoundError(str(parent_id))

            thread = await self.comment_repository.find_by_post(parent.post_id)
            if not self.threading_service.validate_reply_depth(parent_id, thread):
                logfire.warn(
                    "Reply depth exceeded",
                    parent_id=str(parent_id),
                    post_id=str(parent.post_id),
                    max_depth=self.threading_service.max_reply_depth,
                )
                raise DepthExceededError(
                    str(parent_id), self.threading_service.max_reply_depth
                )

            saved = await self._insert(
                parent.post_id, author_id, content, parent_id=parent_id
            )
            logfire.info(
                "Reply created",
                comment_id=str(saved.id),
                parent_id=str(parent_id),
                post_id=str(parent.post_id),
            )
            return saved

    async def update_comment(self, comment_id: CommentId, content: str) -> Comment:
        """Replace the content of a comment.

        Ownership is checked by the caller.

        Args:
            comment_id: Comment ID
            content: New text

        Returns:
            The updated comment

        Raises:
            NotFoundError: If the comment doesn't exist
            ValidationError: If the content is empty or too long
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            content_length=len(content),
        ):
            self._validate_content(content)

            updated = await self.comment_repository.update_content(comment_id, content)
            if updated is None:
                logfire.warn("Comment not found for update", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment content updated", comment_id=str(comment_id))
            return updated

    async def delete_comment(self, comment_id: CommentId) -> int:
        """Delete a comment together with all of its replies.

        Votes on every removed comment are purged as well.

        Args:
            comment_id: Comment ID

        Returns:
            Number of comments removed (the comment plus its descendants)

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found for delete", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            removed = await self.delete_comment_and_replies(comment_id)
            logfire.info(
                "Comment deleted", comment_id=str(comment_id), removed=removed
            )
            return removed

    async def delete_comment_and_replies(self, comment_id: CommentId) -> int:
        """Cascade-delete a comment subtree, replies before their parents.

        The subtree is discovered with one ``find_children`` call per node
        and then deleted one node at a time in post-order. Uses an explicit
        stack so deep threads can't exhaust the interpreter's recursion limit.

        Args:
            comment_id: Root of the subtree to delete

        Returns:
            Number of comments removed
        """
        # Discovery order lists every parent before its children
        discovered: list[CommentId] = [comment_id]
        pending: list[CommentId] = [comment_id]
        while pending:
            current = pending.pop()
            for child in await self.comment_repository.find_children(current):
                discovered.append(child.id)
                pending.append(child.id)

        for target_id in reversed(discovered):
            await self.comment_repository.delete(target_id)
            await self.vote_service.purge_votes(VotableType.COMMENT, target_id)

        return len(discovered)

    async def delete_comments_for_post(self, post_id: PostId) -> int:
        """Delete every comment of a post, including orphaned replies.

        Args:
            post_id: Post ID

        Returns:
            Number of comments removed
        """
        with logfire.span(
            "comment_service.delete_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            ids = {comment.id for comment in comments}
            roots = [
                comment
                for comment in comments
                if comment.parent_id is None or comment.parent_id not in ids
            ]

            removed = 0
            for root in roots:
                removed += await self.delete_comment_and_replies(root.id)

            logfire.info("Post comments deleted", post_id=str(post_id), removed=removed)
            return removed

    async def count_by_post(self, post_id: PostId) -> int:
        """Count the comments of a post."""
        return await self.comment_repository.count_by_post(post_id)

    async def _insert(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: Optional[CommentId],
    ) -> Comment:
        now = datetime.now()
        comment = Comment(
            id=CommentId(uuid4()),
            post_id=post_id,
            author_id=author_id,
            content=content,
            parent_id=parent_id,
            votes=0,
            created_at=now,
            updated_at=now,
        )
        return await self.comment_repository.save(comment)

    async def _enrich(
        self, comments: Sequence[Comment], viewer_id: Optional[UserId]
    ) -> list[CommentView]:
        """Attach authors and the viewer's votes, preserving input order."""
        if not comments:
            return []

        authors = await self.user_service.get_authors(
            comment.author_id for comment in comments
        )

        user_votes: dict = {}
        if viewer_id is not None:
            user_votes = await self.vote_service.get_user_votes(
                user_id=viewer_id,
                target_type=VotableType.COMMENT,
                target_ids=[comment.id for comment in comments],
            )

        return [
            CommentView(
                **comment.model_dump(),
                author=authors[comment.author_id],
                user_vote=user_votes.get(comment.id, 0),
            )
            for comment in comments
        ]

    @staticmethod
    def _validate_content(content: str) -> None:
        if not content or not content.strip():
            raise ValidationError("Comment content cannot be empty")
        if len(content) > MAX_CONTENT_LENGTH:
            raise ValidationError(
                f"Comment content cannot exceed {MAX_CONTENT_LENGTH} characters"
            )
