"""Typed identifiers of Agora's entities.

All ids are UUIDs; the NewTypes keep a post id from being passed where a
comment id is expected.
"""

from typing import NewType, Union
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)

# Anything a vote can point at; paired with a VotableType
VotableId = Union[PostId, CommentId]
