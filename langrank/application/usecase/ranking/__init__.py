"""Ranking use cases."""

from .get_ranking import (
    GetRankingRequest,
    GetRankingResponse,
    GetRankingUseCase,
    RankingItem,
)

__all__ = [
    "GetRankingRequest",
    "GetRankingResponse",
    "GetRankingUseCase",
    "RankingItem",
]
