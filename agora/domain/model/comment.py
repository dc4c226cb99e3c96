"""Comment entity.

Comments are stored flat: each row only knows its ``parent_id``. The reply
tree is rebuilt on every read by the threading service.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.model.user import AuthorSummary
from agora.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - post_id: Always equal to the parent's post_id for replies

    ``votes`` is a denormalized tally owned by the vote service and
    ``updated_at`` only moves when the content is edited.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    votes: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class CommentView(Comment):
    """Comment enriched with its author and the viewer's own vote."""

    author: AuthorSummary
    user_vote: int = Field(default=0, ge=-1, le=1)
