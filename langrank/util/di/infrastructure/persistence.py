"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from langrank.config import Settings
from langrank.domain.repository import (
    AllocationRepository,
    LanguageRepository,
    UserRepository,
)
from langrank.persistence.database import create_engine, create_session_factory
from langrank.persistence.repository import (
    PostgresAllocationRepository,
    PostgresLanguageRepository,
    PostgresUserRepository,
)
from langrank.util.di.base import ProviderBase
from langrank.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised. Votes commit earlier,
        inside AllocationRepository.atomic.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_language_repository(self, session: AsyncSession) -> LanguageRepository:
        """Provide Language repository."""
        return PostgresLanguageRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_allocation_repository(
        self, session: AsyncSession
    ) -> AllocationRepository:
        """Provide Allocation repository."""
        return PostgresAllocationRepository(session)
