"""User entity and the author projection shown on content."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import UserId, Username


class User(DomainModel):
    """User entity.

    Registration and credentials live outside this service; only the fields
    needed to attribute content are kept here.
    """

    id: UserId
    username: Username
    email: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)

    def to_author(self) -> "AuthorSummary":
        """Project the user onto the summary embedded in posts and comments."""
        return AuthorSummary(id=self.id, username=self.username, email=self.email)


class AuthorSummary(DomainModel):
    """Minimal, denormalized view of a content author."""

    id: UserId
    username: Username
    email: Optional[str] = None
