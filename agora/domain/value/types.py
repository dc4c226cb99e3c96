"""Domain value objects for Agora.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum

from pydantic import ConfigDict, RootModel, field_validator

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,50}$")


class VoteType(IntEnum):
    """Direction of a persisted vote.

    There is no neutral member: removing a vote deletes the ledger row.
    """

    UP = 1
    DOWN = -1


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class Username(RootModel[str]):
    """Public username shown next to posts and comments.

    Must be 1-50 characters: letters, digits, dots, hyphens and underscores.
    Dumps to the bare string, so it round-trips through JSON and SQL rows.
    """

    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username must be 1-50 characters of letters, digits, '.', '-' or '_'"
            )
        return v

    def __str__(self) -> str:
        return self.root
