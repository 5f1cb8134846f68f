"""Vote routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictInt

from langrank.application.usecase.vote import (
    GetMonthlyStateRequest,
    GetMonthlyStateResponse,
    GetMonthlyStateUseCase,
    SubmitVoteRequest,
    SubmitVoteUseCase,
    VoteAcceptedResponse,
    VoteRejectedResponse,
)
from langrank.config import Settings
from langrank.domain.error import UnauthenticatedError
from langrank.domain.service import JWTService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteBody(BaseModel):
    """Vote request body."""

    language_id: str
    points: StrictInt


def _authenticated_user_id(
    request: Request, settings: Settings, jwt_service: JWTService, action: str
) -> str:
    user_id = jwt_service.get_user_id_from_token(
        request.cookies.get(settings.auth.cookie_name)
    )
    if not user_id:
        raise UnauthenticatedError(f"Authentication required to {action}")
    return user_id


@router.post(
    "/vote",
    response_model=VoteAcceptedResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": VoteRejectedResponse}},
)
async def submit_vote(
    body: VoteBody,
    request: Request,
    submit_vote_use_case: FromDishka[SubmitVoteUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
):
    """Spend points on a language for the current month.

    Requires authentication. A vote refused by the budget rules returns 400
    with the reason and the remaining headroom.

    Example:
        POST /vote {"language_id": "...", "points": 3}

    Raises:
        UnauthenticatedError: If no valid session cookie is present (401)
        NotFoundError: If the language does not exist (404)
        TransientStoreError: If the vote could not be recorded (503)
    """
    user_id = _authenticated_user_id(request, settings, jwt_service, "vote")

    result = await submit_vote_use_case.execute(
        SubmitVoteRequest(
            user_id=user_id,
            language_id=body.language_id,
            points=body.points,
        )
    )

    if isinstance(result, VoteRejectedResponse):
        logger.info(f"Vote rejected for user {user_id}: {result.reason.value}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(mode="json"),
        )

    return result


@router.get("/user/votes", response_model=GetMonthlyStateResponse)
async def get_user_votes(
    request: Request,
    get_monthly_state_use_case: FromDishka[GetMonthlyStateUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    period: str | None = Query(default=None, description="YYYY-MM, defaults to now"),
) -> GetMonthlyStateResponse:
    """Get the signed-in user's allocations and remaining points for a month.

    Raises:
        UnauthenticatedError: If no valid session cookie is present (401)
        HTTPException: If the period is malformed
    """
    user_id = _authenticated_user_id(request, settings, jwt_service, "view votes")

    try:
        state_request = GetMonthlyStateRequest(user_id=user_id, period=period)
        return await get_monthly_state_use_case.execute(state_request)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
