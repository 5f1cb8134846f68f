"""Aggregation queries over the allocation ledger."""

from dataclasses import dataclass

import logfire

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

from .base import Service


@dataclass
class MonthlyState:
    """A user's spending in one period.

    allocations_by_language sums top-ups, so a language that received 2 and
    then 3 points shows 5.
    """

    period: Period
    allocations_by_language: dict[LanguageId, int]
    total_used: int
    remaining: int
    allocation_count: int


class TallyService(Service):
    """Domain service answering budget questions from the ledger.

    Nothing here is cached: each call reads the current ledger, so two calls
    without an intervening write return the same answer.
    """

    def __init__(self, allocation_repository: AllocationRepository) -> None:
        """Initialize tally service.

        Args:
            allocation_repository: Allocation ledger repository
        """
        self.allocation_repository = allocation_repository

    async def monthly_points_for_user(
        self, user_id: UserId, period: Period
    ) -> MonthlyPoints:
        return await self.allocation_repository.monthly_points_for_user(
            user_id, period
        )

    async def monthly_points_for_user_language(
        self, user_id: UserId, language_id: LanguageId, period: Period
    ) -> int:
        return await self.allocation_repository.monthly_points_for_user_language(
            user_id, language_id, period
        )

    async def lifetime_total_for_language(self, language_id: LanguageId) -> int:
        return await self.allocation_repository.lifetime_total_for_language(
            language_id
        )

    async def has_user_allocated_to_language(
        self, user_id: UserId, language_id: LanguageId, period: Period
    ) -> bool:
        return await self.allocation_repository.has_user_allocated_to_language(
            user_id, language_id, period
        )

    async def allocations_for_user(
        self, user_id: UserId, period: Period
    ) -> list[Allocation]:
        return await self.allocation_repository.find_by_user_and_period(
            user_id, period
        )

    async def monthly_state(
        self, user_id: UserId, period: Period, caps: BudgetCaps
    ) -> MonthlyState:
        """Summarize a user's allocations for a period.

        Args:
            user_id: User ID
            period: Month to summarize
            caps: Budget caps used to compute the remaining points

        Returns:
            Per-language sums, total used and remaining monthly points
        """
        with logfire.span(
            "tally_service.monthly_state", user_id=str(user_id), period=str(period)
        ):
            allocations = await self.allocations_for_user(user_id, period)

            by_language: dict[LanguageId, int] = {}
            for allocation in allocations:
                by_language[allocation.language_id] = (
                    by_language.get(allocation.language_id, 0) + allocation.points
                )

            monthly = await self.monthly_points_for_user(user_id, period)

            return MonthlyState(
                period=period,
                allocations_by_language=by_language,
                total_used=monthly.total_points,
                remaining=max(0, caps.monthly_points - monthly.total_points),
                allocation_count=monthly.allocation_count,
            )

    async def period_stats(self, period: Period) -> PeriodStats:
        """Platform-wide allocation count, voters and points for a period."""
        with logfire.span("tally_service.period_stats", period=str(period)):
            return await self.allocation_repository.period_stats(period)
