"""Get ranking use case."""

from typing import Optional

import logfire
from pydantic import BaseModel, Field, field_validator

from langrank.application.usecase.stats.get_stats import PeriodStatsItem
from langrank.domain.service import RankingService, TallyService
from langrank.domain.value import LIFETIME, Period, RankingScope


class GetRankingRequest(BaseModel):
    """Get ranking request."""

    scope: str = LIFETIME  # "lifetime" or a YYYY-MM month
    limit: Optional[int] = Field(default=None, ge=1, le=500)

    @field_validator("scope")
    @classmethod
    def validate_scope(cls, v: str) -> str:
        if v != LIFETIME:
            Period(v)
        return v

    def to_scope(self) -> RankingScope:
        return LIFETIME if self.scope == LIFETIME else Period(self.scope)


class RankingItem(BaseModel):
    """One ranked language."""

    rank: int
    language_id: str
    name: str
    color: str | None
    total_points: int


class GetRankingResponse(BaseModel):
    """Get ranking response."""

    scope: str
    entries: list[RankingItem]
    period_stats: Optional[PeriodStatsItem] = None  # Only for a month scope


class GetRankingUseCase:
    """Use case for lifetime or monthly standings."""

    def __init__(
        self, ranking_service: RankingService, tally_service: TallyService
    ) -> None:
        """Initialize get ranking use case.

        Args:
            ranking_service: Ranking domain service
            tally_service: Aggregation queries for the month's activity
        """
        self.ranking_service = ranking_service
        self.tally_service = tally_service

    async def execute(self, request: GetRankingRequest) -> GetRankingResponse:
        """Rank languages for the requested scope.

        Args:
            request: Scope and optional limit

        Returns:
            Ranked entries, best first, plus the month's activity when the
            scope is a month
        """
        with logfire.span("get_ranking.execute", scope=request.scope, limit=request.limit):
            scope = request.to_scope()
            entries = await self.ranking_service.rank(scope, limit=request.limit)

            period_stats = None
            if isinstance(scope, Period):
                stats = await self.tally_service.period_stats(scope)
                period_stats = PeriodStatsItem(
                    total_allocations=stats.total_allocations,
                    total_users=stats.total_users,
                    total_points=stats.total_points,
                )

            return GetRankingResponse(
                scope=request.scope,
                entries=[
                    RankingItem(
                        rank=entry.rank,
                        language_id=str(entry.language.id),
                        name=entry.language.name,
                        color=entry.language.color,
                        total_points=entry.total_points,
                    )
                    for entry in entries
                ],
                period_stats=period_stats,
            )
