"""Submit vote use case."""

from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, StrictInt

from langrank.application.usecase.base import BaseUseCase
from langrank.domain.error import NotFoundError
from langrank.domain.service import VoteAccepted, VoteService
from langrank.domain.value import LanguageId, Period, RejectionReason, UserId


class SubmitVoteRequest(BaseModel):
    """Submit vote request."""

    user_id: str  # User ID from authenticated user
    language_id: str  # UUID string
    points: StrictInt  # Range is checked by the budget validator
    period: Optional[str] = None  # YYYY-MM, defaults to the current month


class VoteAcceptedResponse(BaseModel):
    """Accepted vote with the updated budget."""

    success: bool = True
    message: str
    allocation_id: str
    language_id: str
    points: int
    period: str
    remaining_points: int
    language_points: int  # This user's points on the language this month
    language_total_points: int


class VoteRejectedResponse(BaseModel):
    """Rejected vote with the constraint that refused it."""

    success: bool = False
    reason: RejectionReason
    message: str
    used: Optional[int] = None
    cap: Optional[int] = None
    headroom: Optional[int] = None


SubmitVoteResponse = Union[VoteAcceptedResponse, VoteRejectedResponse]


class SubmitVoteUseCase(BaseUseCase):
    """Use case for spending points on a language."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize submit vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: SubmitVoteRequest) -> SubmitVoteResponse:
        """Execute vote flow.

        Args:
            request: Submit vote request

        Returns:
            Accepted response, or rejected response carrying the reason

        Raises:
            NotFoundError: If the language or user does not exist
            TransientStoreError: If the vote could not be recorded
            ValueError: If the period is malformed
        """
        try:
            language_id = LanguageId(UUID(request.language_id))
        except ValueError:
            raise NotFoundError("Language", request.language_id)

        period = Period(request.period) if request.period else Period.current()

        result = await self.vote_service.submit_vote(
            user_id=UserId(UUID(request.user_id)),
            language_id=language_id,
            points=request.points,
            period=period,
        )

        if isinstance(result, VoteAccepted):
            return VoteAcceptedResponse(
                message=(
                    f"Added {result.points} points! "
                    f"Language now has {result.language_points_after} points."
                ),
                allocation_id=str(result.allocation_id),
                language_id=str(result.language_id),
                points=result.points,
                period=str(result.period),
                remaining_points=result.remaining_monthly_points,
                language_points=result.language_points_after,
                language_total_points=result.language_total_points,
            )

        return VoteRejectedResponse(
            reason=result.reason,
            message=result.message,
            used=result.used,
            cap=result.cap,
            headroom=result.headroom,
        )
