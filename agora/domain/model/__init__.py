"""Domain model entities for Agora."""

from agora.domain.model.comment import Comment, CommentView
from agora.domain.model.post import Post, PostView
from agora.domain.model.user import AuthorSummary, User
from agora.domain.model.vote import Vote

__all__ = [
    "AuthorSummary",
    "Comment",
    "CommentView",
    "Post",
    "PostView",
    "User",
    "Vote",
]
