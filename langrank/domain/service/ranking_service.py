"""Ranking projection over languages."""

from dataclasses import dataclass
from typing import Optional

import logfire

from langrank.domain.model import Language
from langrank.domain.repository import AllocationRepository, LanguageRepository
from langrank.domain.value import LIFETIME, Period, RankingScope

from .base import Service


@dataclass
class RankingEntry:
    """One row of a ranking."""

    rank: int
    language: Language
    total_points: int


class RankingService(Service):
    """Domain service producing ordered standings.

    Order is points descending, then name ascending. Ranks are row numbers,
    so tied languages get consecutive ranks in name order.
    """

    def __init__(
        self,
        language_repository: LanguageRepository,
        allocation_repository: AllocationRepository,
    ) -> None:
        """Initialize ranking service.

        Args:
            language_repository: Language repository
            allocation_repository: Allocation ledger repository
        """
        self.language_repository = language_repository
        self.allocation_repository = allocation_repository

    async def rank(
        self, scope: RankingScope, limit: Optional[int] = None
    ) -> list[RankingEntry]:
        """Rank languages for all time or for one period.

        Args:
            scope: LIFETIME or a Period
            limit: Keep only the first entries (after ranking)

        Returns:
            Ranking entries with 1-based ranks

        Raises:
            ValueError: If limit is negative
        """
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")

        with logfire.span("ranking_service.rank", scope=str(scope), limit=limit):
            languages = await self.language_repository.find_all()

            if scope == LIFETIME:
                points = {language.id: language.total_points for language in languages}
            elif isinstance(scope, Period):
                # Languages without votes in the period rank with zero points
                points = await self.allocation_repository.points_by_language(scope)
            else:
                raise ValueError(f"Unsupported ranking scope: {scope!r}")

            ordered = sorted(
                languages,
                key=lambda language: (-points.get(language.id, 0), language.name),
            )
            if limit is not None:
                ordered = ordered[:limit]

            entries = [
                RankingEntry(
                    rank=position,
                    language=language,
                    total_points=points.get(language.id, 0),
                )
                for position, language in enumerate(ordered, start=1)
            ]

            logfire.info("Ranking computed", scope=str(scope), count=len(entries))
            return entries
