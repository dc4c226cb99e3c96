"""Vote entity.

Votes form the ledger that post and comment tallies are derived from.
Each user holds at most one vote per target.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import UserId, VotableType, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per target (replaced, never accumulated)
    - Direction is +1 or -1; withdrawing a vote deletes the row
    - Polymorphic reference to the target (post or comment)
    """

    id: VoteId
    user_id: UserId
    target_type: VotableType
    target_id: UUID  # PostId or CommentId (both are UUIDs)
    vote_type: VoteType
    created_at: datetime = Field(default_factory=datetime.now)
