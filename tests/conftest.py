"""Test configuration and shared builders."""

from datetime import datetime, timedelta
from uuid import uuid4

from agora.domain.model import AuthorSummary, Comment, CommentView, Post, User
from agora.domain.value import CommentId, PostId, UserId, Username

# Fixed reference time so ordering assertions don't depend on the clock
T0 = datetime(2026, 1, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after the reference time."""
    return T0 + timedelta(minutes=minutes)


def make_user(username: str = "alice") -> User:
    """Build a user with a fresh id."""
    return User(id=UserId(uuid4()), username=Username(root=username), created_at=T0)


def make_post(author_id: UserId, title: str = "Test Post", minutes: int = 0) -> Post:
    """Build a post created ``minutes`` after the reference time."""
    return Post(
        id=PostId(uuid4()),
        title=title,
        content="Test content",
        author_id=author_id,
        votes=0,
        created_at=at(minutes),
        updated_at=at(minutes),
    )


def make_comment(
    post_id: PostId,
    author_id: UserId,
    parent_id: CommentId | None = None,
    minutes: int = 0,
    content: str = "Test comment",
) -> Comment:
    """Build a comment created ``minutes`` after the reference time."""
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id,
        content=content,
        parent_id=parent_id,
        votes=0,
        created_at=at(minutes),
        updated_at=at(minutes),
    )


def make_view(
    parent: CommentView | None = None,
    minutes: int = 0,
    post_id: PostId | None = None,
    parent_id: CommentId | None = None,
) -> CommentView:
    """Build an enriched comment for the threading engine.

    Args:
        parent: Comment being replied to (sets parent_id and post_id)
        minutes: Creation time relative to the reference time
        post_id: Post of a root comment
        parent_id: Explicit parent id, e.g. one that doesn't exist
    """
    author_id = UserId(uuid4())
    if parent is not None:
        post_id = parent.post_id
        parent_id = parent.id
    return CommentView(
        id=CommentId(uuid4()),
        post_id=post_id or PostId(uuid4()),
        author_id=author_id,
        content="Test comment",
        parent_id=parent_id,
        votes=0,
        created_at=at(minutes),
        updated_at=at(minutes),
        author=AuthorSummary(id=author_id, username=Username(root="author")),
        user_vote=0,
    )
