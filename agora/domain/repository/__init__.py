"""Repository interfaces for the Agora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from agora.domain.repository.comment import CommentRepository
from agora.domain.repository.post import PostRepository
from agora.domain.repository.user import UserRepository
from agora.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "VoteRepository",
]
