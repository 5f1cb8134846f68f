"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from langrank.application.usecase.stats import GetStatsRequest, GetStatsUseCase
from langrank.application.usecase.stats.get_stats import PeriodStatsItem
from langrank.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    current_period: str
    stats: PeriodStatsItem


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    stats_use_case: FromDishka[GetStatsUseCase],
) -> HealthResponse:
    """Health check with the current month's voting activity.

    Reading the stats also proves the database is reachable.
    """
    stats = await stats_use_case.execute(GetStatsRequest())

    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
        git_sha=settings.git_sha,
        current_period=stats.period,
        stats=stats.period_stats,
    )
