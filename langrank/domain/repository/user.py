"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from langrank.domain.model.user import User
from langrank.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by their GitHub account ID.

        Args:
            external_id: GitHub account ID as a string

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count registered users."""
        pass
