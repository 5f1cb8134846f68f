"""Get platform stats use case."""

from typing import Optional

from pydantic import BaseModel

from langrank.domain.repository import AllocationRepository
from langrank.domain.service import LanguageService, TallyService, UserService
from langrank.domain.value import Period


class GetStatsRequest(BaseModel):
    """Get stats request."""

    period: Optional[str] = None  # YYYY-MM, defaults to the current month


class PeriodStatsItem(BaseModel):
    """Activity for one month."""

    total_allocations: int
    total_users: int
    total_points: int


class GetStatsResponse(BaseModel):
    """Platform-wide counts plus the month's activity."""

    users: int
    languages: int
    allocations: int
    period: str
    period_stats: PeriodStatsItem


class GetStatsUseCase:
    """Use case for admin and health statistics."""

    def __init__(
        self,
        user_service: UserService,
        language_service: LanguageService,
        tally_service: TallyService,
        allocation_repository: AllocationRepository,
    ) -> None:
        """Initialize get stats use case.

        Args:
            user_service: User domain service
            language_service: Language domain service
            tally_service: Aggregation queries
            allocation_repository: Allocation ledger (total count)
        """
        self.user_service = user_service
        self.language_service = language_service
        self.tally_service = tally_service
        self.allocation_repository = allocation_repository

    async def execute(self, request: GetStatsRequest) -> GetStatsResponse:
        """Collect counts for the whole platform and one month.

        Raises:
            ValueError: If the period is malformed
        """
        period = Period(request.period) if request.period else Period.current()
        stats = await self.tally_service.period_stats(period)

        return GetStatsResponse(
            users=await self.user_service.count(),
            languages=await self.language_service.count(),
            allocations=await self.allocation_repository.count(),
            period=str(period),
            period_stats=PeriodStatsItem(
                total_allocations=stats.total_allocations,
                total_users=stats.total_users,
                total_points=stats.total_points,
            ),
        )
