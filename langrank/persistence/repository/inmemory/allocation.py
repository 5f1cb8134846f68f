"""In-memory allocation ledger for testing."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

from langrank.domain.error import ConcurrencyConflictError
from langrank.domain.model.allocation import Allocation
from langrank.domain.repository.allocation import AllocationRepository
from langrank.domain.value import (
    BudgetCaps,
    LanguageId,
    MonthlyPoints,
    Period,
    PeriodStats,
    UserId,
)


class InMemoryAllocationRepository(AllocationRepository):
    """In-memory implementation of AllocationRepository for testing.

    atomic() holds a per-user asyncio.Lock and calls commit() when the block
    exits cleanly. If the block or the commit raises, the user's allocations
    appended inside it are discarded.
    """

    def __init__(self) -> None:
        self._allocations: list[Allocation] = []
        self._locks: dict[UserId, asyncio.Lock] = {}

    @asynccontextmanager
    async def atomic(self, user_id: UserId) -> AsyncIterator[None]:
        """Serialize a user's vote and roll back its appends on failure."""
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        async with lock:
            before = {allocation.id for allocation in self._allocations}
            try:
                yield
                await self.commit()
            except BaseException:
                self._allocations = [
                    allocation
                    for allocation in self._allocations
                    if allocation.id in before or allocation.user_id != user_id
                ]
                raise

    async def commit(self) -> None:
        """Make the block's appends durable. Nothing to flush in memory."""
        pass

    async def append(self, allocation: Allocation, caps: BudgetCaps) -> Allocation:
        """Append if the post-insert sums fit the caps.

        Raises:
            ConcurrencyConflictError: If a cap would be exceeded
        """
        language_sum = await self.monthly_points_for_user_language(
            allocation.user_id, allocation.language_id, allocation.period
        )
        monthly = await self.monthly_points_for_user(
            allocation.user_id, allocation.period
        )

        if (
            language_sum + allocation.points > caps.language_points
            or monthly.total_points + allocation.points > caps.monthly_points
        ):
            raise ConcurrencyConflictError(
                "Budget changed while the vote was being recorded"
            )

        self._allocations.append(allocation)
        return allocation

    def _for_user_period(self, user_id: UserId, period: Period) -> list[Allocation]:
        return [
            a for a in self._allocations if a.user_id == user_id and a.period == period
        ]

    async def monthly_points_for_user(
        self, user_id: UserId, period: Period
    ) -> MonthlyPoints:
        allocations = self._for_user_period(user_id, period)
        return MonthlyPoints(
            total_points=sum(a.points for a in allocations),
            allocation_count=len(allocations),
        )

    async def monthly_points_for_user_language(
        self, user_id: UserId, language_id: LanguageId, period: Period
    ) -> int:
        return sum(
            a.points
            for a in self._for_user_period(user_id, period)
            if a.language_id == language_id
        )

    async def lifetime_total_for_language(self, language_id: LanguageId) -> int:
        return sum(a.points for a in self._allocations if a.language_id == language_id)

    async def has_user_allocated_to_language(
        self, user_id: UserId, language_id: LanguageId, period: Period
    ) -> bool:
        return any(
            a.language_id == language_id
            for a in self._for_user_period(user_id, period)
        )

    async def find_by_user_and_period(
        self, user_id: UserId, period: Period
    ) -> List[Allocation]:
        return self._for_user_period(user_id, period)

    async def points_by_language(self, period: Period) -> Dict[LanguageId, int]:
        totals: Dict[LanguageId, int] = {}
        for a in self._allocations:
            if a.period == period:
                totals[a.language_id] = totals.get(a.language_id, 0) + a.points
        return totals

    async def period_stats(self, period: Period) -> PeriodStats:
        allocations = [a for a in self._allocations if a.period == period]
        return PeriodStats(
            total_allocations=len(allocations),
            total_users=len({a.user_id for a in allocations}),
            total_points=sum(a.points for a in allocations),
        )

    async def count(self) -> int:
        return len(self._allocations)
