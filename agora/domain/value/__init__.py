"""Identifiers and value objects shared across the domain."""

from agora.domain.value.identifiers import (
    CommentId,
    PostId,
    UserId,
    VotableId,
    VoteId,
)
from agora.domain.value.types import (
    Username,
    VotableType,
    VoteType,
)

__all__ = [
    "CommentId",
    "PostId",
    "UserId",
    "VotableId",
    "VoteId",
    "Username",
    "VotableType",
    "VoteType",
]
