"""Admin routes, guarded by a static bearer key."""

import secrets
from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel

from langrank.application.usecase.stats import (
    GetStatsRequest,
    GetStatsResponse,
    GetStatsUseCase,
)
from langrank.config import Settings
from langrank.util.error import ConfigurationError

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


class AdminStatsResponse(BaseModel):
    """Platform statistics for operators."""

    timestamp: datetime
    environment: str
    git_sha: str
    voting_strategy: str
    stats: GetStatsResponse


def _require_admin_key(settings: Settings, authorization: str | None) -> None:
    api_key = settings.admin.api_key
    if not api_key:
        raise ConfigurationError("ADMIN__API_KEY", "Admin API key not configured")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not secrets.compare_digest(
        token.encode(), api_key.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin API key",
        )


@router.get("/stats", response_model=AdminStatsResponse)
async def get_admin_stats(
    settings: FromDishka[Settings],
    stats_use_case: FromDishka[GetStatsUseCase],
    authorization: str | None = Header(default=None),
    period: str | None = None,
) -> AdminStatsResponse:
    """Totals for users, languages and allocations plus one month's activity.

    Requires "Authorization: Bearer <ADMIN__API_KEY>".
    """
    _require_admin_key(settings, authorization)

    try:
        stats = await stats_use_case.execute(GetStatsRequest(period=period))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return AdminStatsResponse(
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        git_sha=settings.git_sha,
        voting_strategy=settings.voting.strategy,
        stats=stats,
    )
