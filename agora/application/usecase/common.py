"""Response items shared by several use cases.

Serialized with camelCase field names, the shape clients already consume.
"""

from datetime import datetime
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from agora.domain.model import AuthorSummary, Comment, CommentView, PostView
from agora.domain.service import CommentTreeNode
from agora.domain.value import CommentId


class CamelModel(BaseModel):
    """Base for models exchanged with API clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthorItem(CamelModel):
    """Author summary in response."""

    id: str
    username: str
    email: Optional[str] = None

    @classmethod
    def from_author(cls, author: AuthorSummary) -> "AuthorItem":
        return cls(id=str(author.id), username=author.username.root, email=author.email)


class CommentItem(CamelModel):
    """Comment item in response."""

    id: str
    post_id: str
    author_id: str
    content: str
    parent_id: Optional[str]
    votes: int
    user_vote: int = 0
    created_at: datetime
    updated_at: datetime
    author: Optional[AuthorItem] = None

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        """Build an item from a bare or enriched comment."""
        is_view = isinstance(comment, CommentView)
        return cls(
            id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            votes=comment.votes,
            user_vote=comment.user_vote if is_view else 0,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            author=AuthorItem.from_author(comment.author) if is_view else None,
        )


class CommentNodeItem(CommentItem):
    """Comment with its nested replies."""

    depth: int
    replies: list["CommentNodeItem"] = []

    @classmethod
    def from_tree(cls, roots: Sequence[CommentTreeNode]) -> list["CommentNodeItem"]:
        """Convert built tree nodes to items, keeping their order.

        Nodes are visited in pre-order and converted in reverse, so every
        reply is built before its parent and the nesting depth of a thread
        never reaches the call stack.
        """
        ordered: list[CommentTreeNode] = []
        stack = list(reversed(roots))
        while stack:
            node = stack.pop()
            ordered.append(node)
            stack.extend(reversed(node.replies))

        built: dict[CommentId, CommentNodeItem] = {}
        for node in reversed(ordered):
            item = CommentItem.from_comment(node.comment)
            built[node.id] = cls(
                **item.model_dump(),
                depth=node.depth,
                replies=[built[reply.id] for reply in node.replies],
            )

        return [built[root.id] for root in roots]


class PostItem(CamelModel):
    """Post item in response."""

    id: str
    title: str
    content: str
    author_id: str
    author: AuthorItem
    votes: int
    user_vote: int
    comment_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, post: PostView) -> "PostItem":
        return cls(
            id=str(post.id),
            title=post.title,
            content=post.content,
            author_id=str(post.author_id),
            author=AuthorItem.from_author(post.author),
            votes=post.votes,
            user_vote=post.user_vote,
            comment_count=post.comment_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
