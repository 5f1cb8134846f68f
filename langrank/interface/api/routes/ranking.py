"""Ranking routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status

from langrank.application.usecase.ranking import (
    GetRankingRequest,
    GetRankingResponse,
    GetRankingUseCase,
)
from langrank.domain.value import LIFETIME

router = APIRouter(tags=["ranking"], route_class=DishkaRoute)


@router.get("/ranking", response_model=GetRankingResponse)
async def get_ranking(
    get_ranking_use_case: FromDishka[GetRankingUseCase],
    scope: str = Query(default=LIFETIME, description="'lifetime' or a YYYY-MM month"),
    limit: int | None = Query(default=None, ge=1, le=500),
) -> GetRankingResponse:
    """Rank languages by lifetime points or by points in one month.

    Ties are broken by name, so repeated reads return the same order.

    Raises:
        HTTPException: If the scope is not 'lifetime' or a valid month
    """
    try:
        request = GetRankingRequest(scope=scope, limit=limit)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid scope: {scope}",
        ) from e

    return await get_ranking_use_case.execute(request)
