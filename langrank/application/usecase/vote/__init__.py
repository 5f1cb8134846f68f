"""Vote use cases."""

from .get_monthly_state import (
    GetMonthlyStateRequest,
    GetMonthlyStateResponse,
    GetMonthlyStateUseCase,
)
from .submit_vote import (
    SubmitVoteRequest,
    SubmitVoteUseCase,
    VoteAcceptedResponse,
    VoteRejectedResponse,
)

__all__ = [
    "GetMonthlyStateRequest",
    "GetMonthlyStateResponse",
    "GetMonthlyStateUseCase",
    "SubmitVoteRequest",
    "SubmitVoteUseCase",
    "VoteAcceptedResponse",
    "VoteRejectedResponse",
]
