"""Allocation ledger repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Dict, List

from langrank.domain.model.allocation import Allocation
from langrank.domain.value import (
    BudgetCaps,
    LanguageId,
    MonthlyPoints,
    Period,
    PeriodStats,
    UserId,
)


class AllocationRepository(ABC):
    """Append-only store of allocations plus the aggregates derived from it.

    Every aggregate is recomputed from the ledger on demand; there are no
    cached counters apart from Language.total_points, which the vote service
    rewrites from lifetime_total_for_language after each accepted append.
    """

    @abstractmethod
    def atomic(self, user_id: UserId) -> AbstractAsyncContextManager[None]:
        """Serialize validate-then-append for one user.

        Concurrent blocks for the same user run one after another. The block's
        writes are committed when it exits, so a commit failure is raised
        from the ``async with`` itself. If the block raises, nothing written
        inside it is kept.

        Args:
            user_id: User whose budget is being spent
        """
        pass

    @abstractmethod
    async def append(self, allocation: Allocation, caps: BudgetCaps) -> Allocation:
        """Append an allocation if it still fits the caps.

        The cap check and the insert happen as one statement, so a write that
        raced past validation cannot overshoot the monthly or per-language
        ceiling.

        Args:
            allocation: Allocation to record
            caps: Ceilings the post-insert sums must respect

        Returns:
            The stored allocation

        Raises:
            ConcurrencyConflictError: If the caps no longer allow the insert
        """
        pass

    @abstractmethod
    async def monthly_points_for_user(
        self, user_id: UserId, period: Period
    ) -> MonthlyPoints:
        """Sum of points and number of allocations by a user in a period."""
        pass

    @abstractmethod
    async def monthly_points_for_user_language(
        self, user_id: UserId, language_id: LanguageId, period: Period
    ) -> int:
        """Sum of points a user gave one language in a period."""
        pass

    @abstractmethod
    async def lifetime_total_for_language(self, language_id: LanguageId) -> int:
        """Sum of points a language received across all periods."""
        pass

    @abstractmethod
    async def has_user_allocated_to_language(
        self, user_id: UserId, language_id: LanguageId, period: Period
    ) -> bool:
        """Whether any allocation exists for the user, language and period."""
        pass

    @abstractmethod
    async def find_by_user_and_period(
        self, user_id: UserId, period: Period
    ) -> List[Allocation]:
        """Allocations by a user in a period, oldest first.

        Args:
            user_id: The user's ID
            period: Month to read

        Returns:
            List of allocations in insertion order
        """
        pass

    @abstractmethod
    async def points_by_language(self, period: Period) -> Dict[LanguageId, int]:
        """Per-language point sums for a period.

        Languages without allocations in the period are absent.
        """
        pass

    @abstractmethod
    async def period_stats(self, period: Period) -> PeriodStats:
        """Allocation count, distinct voters and point sum for a period."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Total number of allocations ever recorded."""
        pass
