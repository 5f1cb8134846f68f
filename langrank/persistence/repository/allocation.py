"""PostgreSQL implementation of the allocation ledger."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

import logfire
from sqlalchemy import Integer, String, and_, func, insert, literal, select
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from langrank.domain.error import ConcurrencyConflictError
from langrank.domain.model import Allocation
from langrank.domain.repository import AllocationRepository
from langrank.domain.value import (
    BudgetCaps,
    LanguageId,
    MonthlyPoints,
    Period,
    PeriodStats,
    UserId,
)
from langrank.persistence.mappers import row_to_allocation
from langrank.persistence.tables import allocations_table, users_table


class PostgresAllocationRepository(AllocationRepository):
    """PostgreSQL implementation of AllocationRepository.

    atomic() opens a SAVEPOINT, locks the user's row with
    SELECT ... FOR UPDATE and commits when the block exits cleanly. A second
    vote by the same user waits on the lock until the first has committed,
    and a failed COMMIT surfaces to the caller before any result is built.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def atomic(self, user_id: UserId) -> AsyncIterator[None]:
        """Serialize a user's vote behind a row lock and commit it on exit.

        Raises:
            SQLAlchemyError: If the lock, a statement or the COMMIT fails.
                The session is rolled back so the caller may retry.
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    select(users_table.c.id)
                    .where(users_table.c.id == user_id)
                    .with_for_update()
                )
                yield
            await self.session.commit()
        except SQLAlchemyError as e:
            logfire.warn(
                "Allocation transaction failed", user_id=str(user_id), error=str(e)
            )
            await self.session.rollback()
            raise

    async def append(self, allocation: Allocation, caps: BudgetCaps) -> Allocation:
        """Insert the allocation only if both post-insert sums fit the caps.

        Runs as INSERT ... SELECT ... WHERE, so the check and the write are
        a single statement.
        """
        a = allocations_table
        period = str(allocation.period)

        language_sum = (
            select(func.coalesce(func.sum(a.c.points), 0))
            .where(
                and_(
                    a.c.user_id == allocation.user_id,
                    a.c.language_id == allocation.language_id,
                    a.c.period == period,
                )
            )
            .scalar_subquery()
        )
        monthly_sum = (
            select(func.coalesce(func.sum(a.c.points), 0))
            .where(and_(a.c.user_id == allocation.user_id, a.c.period == period))
            .scalar_subquery()
        )

        source = select(
            literal(allocation.id, UUID),
            literal(allocation.user_id, UUID),
            literal(allocation.language_id, UUID),
            literal(allocation.points, Integer),
            literal(period, String),
            literal(allocation.created_at, TIMESTAMP(timezone=True)),
        ).where(
            and_(
                language_sum + allocation.points <= caps.language_points,
                monthly_sum + allocation.points <= caps.monthly_points,
            )
        )

        stmt = insert(a).from_select(
            ["id", "user_id", "language_id", "points", "period", "created_at"],
            source,
        )
        result = await self.session.execute(stmt)

        if result.rowcount == 0:
            logfire.warn(
                "Conditional allocation insert matched no rows",
                user_id=str(allocation.user_id),
                language_id=str(allocation.language_id),
                points=allocation.points,
                period=period,
            )
            raise ConcurrencyConflictError(
                "Budget changed while the vote was being recorded"
            )

        await self.session.flush()
        return allocation

    async def monthly_points_for_user(
        self, user_id: UserId, period: Period
    ) -> MonthlyPoints:
        """Sum and count of a user's allocations in a period."""
        a = allocations_table
        stmt = select(
            func.coalesce(func.sum(a.c.points), 0), func.count(a.c.id)
        ).where(and_(a.c.user_id == user_id, a.c.period == str(period)))
        result = await self.session.execute(stmt)
        total, count = result.one()
        return MonthlyPoints(total_points=total, allocation_count=count)

    async def monthly_points_for_user_language(
        self, user_id: UserId, language_id: LanguageId, period: Period
    ) -> int:
        """Sum of a user's points on one language in a period."""
        a = allocations_table
        stmt = select(func.coalesce(func.sum(a.c.points), 0)).where(
            and_(
                a.c.user_id == user_id,
                a.c.language_id == language_id,
                a.c.period == str(period),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def lifetime_total_for_language(self, language_id: LanguageId) -> int:
        """Sum of a language's points across all periods."""
        a = allocations_table
        stmt = select(func.coalesce(func.sum(a.c.points), 0)).where(
            a.c.language_id == language_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def has_user_allocated_to_language(
        self, user_id: UserId, language_id: LanguageId, period: Period
    ) -> bool:
        """Whether the user voted for the language in the period."""
        a = allocations_table
        stmt = select(
            select(a.c.id)
            .where(
                and_(
                    a.c.user_id == user_id,
                    a.c.language_id == language_id,
                    a.c.period == str(period),
                )
            )
            .exists()
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar_one())

    async def find_by_user_and_period(
        self, user_id: UserId, period: Period
    ) -> List[Allocation]:
        """A user's allocations in a period, oldest first."""
        a = allocations_table
        stmt = (
            select(a)
            .where(and_(a.c.user_id == user_id, a.c.period == str(period)))
            .order_by(a.c.created_at, a.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_allocation(row._asdict()) for row in result.fetchall()]

    async def points_by_language(self, period: Period) -> Dict[LanguageId, int]:
        """Per-language sums for a period."""
        a = allocations_table
        stmt = (
            select(a.c.language_id, func.sum(a.c.points))
            .where(a.c.period == str(period))
            .group_by(a.c.language_id)
        )
        result = await self.session.execute(stmt)
        return {LanguageId(row[0]): int(row[1]) for row in result.fetchall()}

    async def period_stats(self, period: Period) -> PeriodStats:
        """Allocations, distinct voters and points for a period."""
        a = allocations_table
        stmt = select(
            func.count(a.c.id),
            func.count(func.distinct(a.c.user_id)),
            func.coalesce(func.sum(a.c.points), 0),
        ).where(a.c.period == str(period))
        result = await self.session.execute(stmt)
        total_allocations, total_users, total_points = result.one()
        return PeriodStats(
            total_allocations=total_allocations,
            total_users=total_users,
            total_points=total_points,
        )

    async def count(self) -> int:
        """Total allocations recorded."""
        stmt = select(func.count()).select_from(allocations_table)
        result = await self.session.execute(stmt)
        return result.scalar_one()
