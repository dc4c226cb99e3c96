"""Post entity.

Posts are the top-level discussion items that comments hang off.
"""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.model.user import AuthorSummary
from agora.domain.value import PostId, UserId


class Post(DomainModel):
    """Post entity.

    ``votes`` is a denormalized tally owned by the vote service; it is
    rewritten from the vote ledger on every vote and never bumps
    ``updated_at``.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=40000)
    author_id: UserId
    votes: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class PostView(Post):
    """Post enriched for a specific viewer."""

    author: AuthorSummary
    user_vote: int = Field(default=0, ge=-1, le=1)
    comment_count: int = Field(default=0, ge=0)
