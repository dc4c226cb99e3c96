"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .post_service import PostService
from .threading_service import CommentTreeNode, ThreadingService
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "CommentTreeNode",
    "JWTService",
    "PostService",
    "Service",
    "ThreadingService",
    "UserService",
    "VoteService",
]
