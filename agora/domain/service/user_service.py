"""User domain service."""

from typing import Iterable

import logfire

from agora.domain.error import NotFoundError
from agora.domain.model import AuthorSummary, User
from agora.domain.repository import UserRepository
from agora.domain.value import UserId, Username

from .base import Service

# Shown in place of authors whose account no longer exists
DELETED_USERNAME = Username("deleted")


class UserService(Service):
    """Domain service for user lookups.

    This service never authenticates anyone; it only resolves user ids into
    the author summaries embedded in posts and comments.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_author(self, user_id: UserId) -> AuthorSummary:
        """Get the author projection of a user.

        Args:
            user_id: User ID

        Returns:
            Author summary (id, username, email)

        Raises:
            NotFoundError: If user not found
        """
        user = await self.get_by_id(user_id)
        return user.to_author()

    async def get_authors(
        self, user_ids: Iterable[UserId]
    ) -> dict[UserId, AuthorSummary]:
        """Resolve many authors with one query.

        Users that no longer exist are mapped to a placeholder summary so
        their content can still be shown.

        Args:
            user_ids: IDs to resolve (duplicates are fine)

        Returns:
            Mapping of every requested ID to its author summary
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}

        users = await self.user_repository.find_by_ids(unique_ids)
        authors = {user.id: user.to_author() for user in users}

        missing = [uid for uid in unique_ids if uid not in authors]
        if missing:
            logfire.warn("Authors not found", count=len(missing))
            for uid in missing:
                authors[uid] = self.placeholder_author(uid)

        return authors

    @staticmethod
    def placeholder_author(user_id: UserId) -> AuthorSummary:
        """Author summary for an account that has been removed."""
        return AuthorSummary(id=user_id, username=DELETED_USERNAME, email=None)

    async def save(self, user: User) -> User:
        """Save user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with logfire.span(
            "user_service.save", user_id=str(user.id), username=user.username.root
        ):
            saved = await self.user_repository.save(user)
            logfire.info(
                "User saved", user_id=str(saved.id), username=saved.username.root
            )
            return saved
