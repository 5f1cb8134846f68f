"""Get monthly state use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from langrank.application.usecase.base import BaseUseCase
from langrank.domain.service import TallyService
from langrank.domain.value import BudgetCaps, Period, UserId


class GetMonthlyStateRequest(BaseModel):
    """Get monthly state request."""

    user_id: str
    period: Optional[str] = None  # YYYY-MM, defaults to the current month


class GetMonthlyStateResponse(BaseModel):
    """A user's spending for one month."""

    period: str
    allocations_by_language: dict[str, int]  # Language ID -> points this month
    total_used: int
    remaining: int
    allocation_count: int
    monthly_cap: int


class GetMonthlyStateUseCase(BaseUseCase):
    """Use case for reading a user's budget for a month."""

    def __init__(self, tally_service: TallyService, caps: BudgetCaps) -> None:
        """Initialize get monthly state use case.

        Args:
            tally_service: Aggregation queries
            caps: Budget ceilings
        """
        self.tally_service = tally_service
        self.caps = caps

    async def execute(self, request: GetMonthlyStateRequest) -> GetMonthlyStateResponse:
        """Summarize the user's allocations for the month.

        Raises:
            ValueError: If the period is malformed
        """
        period = Period(request.period) if request.period else Period.current()

        state = await self.tally_service.monthly_state(
            UserId(UUID(request.user_id)), period, self.caps
        )

        logfire.info(
            "Monthly state read",
            user_id=request.user_id,
            period=str(period),
            total_used=state.total_used,
        )

        return GetMonthlyStateResponse(
            period=str(state.period),
            allocations_by_language={
                str(language_id): points
                for language_id, points in state.allocations_by_language.items()
            },
            total_used=state.total_used,
            remaining=state.remaining,
            allocation_count=state.allocation_count,
            monthly_cap=self.caps.monthly_points,
        )
