"""User domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from langrank.domain.error import NotFoundError
from langrank.domain.model import User
from langrank.domain.repository import UserRepository
from langrank.domain.value import ExternalIdentity, UserId

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

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

    async def upsert_from_identity(self, identity: ExternalIdentity) -> User:
        """Create or refresh the user behind a GitHub identity.

        The GitHub account ID is the lookup key. Display name and avatar are
        overwritten on every login so renamed accounts stay current.

        Args:
            identity: Identity returned by the OAuth provider

        Returns:
            The saved user
        """
        with logfire.span(
            "user_service.upsert_from_identity", external_id=identity.external_id
        ):
            existing = await self.user_repository.find_by_external_id(
                identity.external_id
            )

            if existing:
                updated = existing.model_copy(
                    update={
                        "display_name": identity.display_name,
                        "avatar_url": identity.avatar_url,
                        "updated_at": datetime.now(timezone.utc),
                    }
                )
                user = await self.user_repository.save(updated)
                logfire.info(
                    "User refreshed from GitHub",
                    user_id=str(user.id),
                    display_name=user.display_name,
                )
                return user

            now = datetime.now(timezone.utc)
            user = await self.user_repository.save(
                User(
                    id=UserId(uuid4()),
                    external_id=identity.external_id,
                    display_name=identity.display_name,
                    avatar_url=identity.avatar_url,
                    created_at=now,
                    updated_at=now,
                )
            )
            logfire.info(
                "User created from GitHub",
                user_id=str(user.id),
                display_name=user.display_name,
            )
            return user

    async def count(self) -> int:
        return await self.user_repository.count()
