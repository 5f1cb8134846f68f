"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from langrank.domain.model import User
from langrank.domain.repository import UserRepository
from langrank.domain.value import UserId
from langrank.persistence.mappers import row_to_user, user_to_dict
from langrank.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_external_id(self, external_id: str) -> Optional[User]:
        """Find a user by GitHub account ID."""
        stmt = select(users_table).where(users_table.c.external_id == external_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        user_dict = user_to_dict(user)

        existing = await self.find_by_id(user.id)

        if existing:
            # external_id never changes after creation
            user_dict.pop("external_id")
            user_dict.pop("created_at")
            stmt = (
                update(users_table)
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = insert(users_table).values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def count(self) -> int:
        """Count registered users."""
        stmt = select(func.count()).select_from(users_table)
        result = await self.session.execute(stmt)
        return result.scalar_one()
