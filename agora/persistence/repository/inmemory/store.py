"""Shared backing store for the in-memory repositories."""

from dataclasses import dataclass, field
from uuid import UUID

from agora.domain.model import Comment, Post, User, Vote
from agora.domain.value import CommentId, PostId, UserId


@dataclass
class InMemoryStore:
    """Process-local tables, shared so every repository sees the same data.

    Votes are keyed by ``(user_id, target_type, target_id)``, which keeps
    the one-vote-per-user-per-target rule structural.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    posts: dict[PostId, Post] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    votes: dict[tuple[UUID, str, UUID], Vote] = field(default_factory=dict)

    def clear(self) -> None:
        """Drop every row."""
        self.users.clear()
        self.posts.clear()
        self.comments.clear()
        self.votes.clear()
