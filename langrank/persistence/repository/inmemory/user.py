"""In-memory user repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from langrank.domain.model.user import User
from langrank.domain.repository.user import UserRepository
from langrank.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by GitHub account ID."""
        for user in self._users.values():
            if user.external_id == external_id:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user.

        Raises:
            IntegrityError: If another user already has this external_id
        """
        for other in self._users.values():
            if other.external_id == user.external_id and other.id != user.id:
                raise IntegrityError("Duplicate external_id", None, Exception())

        self._users[user.id] = user
        return user

    async def count(self) -> int:
        return len(self._users)
