"""Budget validation strategies.

A validator decides whether a proposed allocation fits the user's budget for
a period. It only reads the ledger; the vote service performs the write.

Two rule sets exist:

    CumulativeBudgetValidator
        Any number of top-ups, at most 5 points per language and 10 per
        month. This is the production rule set.

    SlotBudgetValidator
        One vote per language, using each of the 5, 3 and 2 point slots
        once per month.
"""

from abc import ABC, abstractmethod

import logfire

from langrank.domain.value import (
    BudgetCaps,
    BudgetDecision,
    LanguageId,
    Period,
    RejectionReason,
    UserId,
)

from .base import Service
from .tally_service import TallyService


class BudgetValidator(Service, ABC):
    """Decides whether an allocation is admissible."""

    def __init__(self, tally_service: TallyService, caps: BudgetCaps) -> None:
        """Initialize validator.

        Args:
            tally_service: Aggregation queries over the ledger
            caps: Budget ceilings
        """
        self.tally_service = tally_service
        self.caps = caps

    @abstractmethod
    async def validate(
        self,
        user_id: UserId,
        language_id: LanguageId,
        points: int,
        period: Period,
    ) -> BudgetDecision:
        """Validate a proposed allocation.

        Checks run in a fixed order and stop at the first failure, so the
        same request always yields the same reason.

        Args:
            user_id: User spending the points
            language_id: Language receiving the points
            points: Requested points
            period: Month the points count against

        Returns:
            Accepting decision, or a rejection with reason and headroom
        """
        pass

    def _check_range(self, points: int) -> BudgetDecision | None:
        # bool is an int subclass; True must not count as one point
        if (
            isinstance(points, bool)
            or not isinstance(points, int)
            or not self.caps.min_points <= points <= self.caps.max_points
        ):
            return BudgetDecision.reject(
                RejectionReason.POINTS_OUT_OF_RANGE,
                "points out of range",
            )
        return None

    async def _check_monthly_cap(
        self, user_id: UserId, points: int, period: Period
    ) -> BudgetDecision | None:
        monthly = await self.tally_service.monthly_points_for_user(user_id, period)
        used = monthly.total_points
        cap = self.caps.monthly_points

        if used + points > cap:
            headroom = max(0, cap - used)
            return BudgetDecision.reject(
                RejectionReason.MONTHLY_CAP_EXCEEDED,
                f"Not enough points remaining. You have {headroom} points left this month.",
                used=used,
                cap=cap,
                headroom=headroom,
            )
        return None

    def _log_rejection(self, decision: BudgetDecision, user_id: UserId) -> None:
        logfire.info(
            "Allocation rejected",
            user_id=str(user_id),
            reason=decision.reason.value if decision.reason else None,
            used=decision.used,
            cap=decision.cap,
            headroom=decision.headroom,
        )


class CumulativeBudgetValidator(BudgetValidator):
    """Top-ups allowed within the per-language and monthly caps.

    Order: range, per-language cap, monthly cap. Both caps compare the total
    after the addition, so spending exactly the remaining headroom passes.
    """

    async def validate(
        self,
        user_id: UserId,
        language_id: LanguageId,
        points: int,
        period: Period,
    ) -> BudgetDecision:
        with logfire.span(
            "budget_validator.cumulative",
            user_id=str(user_id),
            language_id=str(language_id),
            points=points,
            period=str(period),
        ):
            rejection = self._check_range(points)
            if rejection:
                self._log_rejection(rejection, user_id)
                return rejection

            used = await self.tally_service.monthly_points_for_user_language(
                user_id, language_id, period
            )
            cap = self.caps.language_points
            if used + points > cap:
                headroom = max(0, cap - used)
                rejection = BudgetDecision.reject(
                    RejectionReason.LANGUAGE_CAP_EXCEEDED,
                    f"Cannot exceed {cap} points per language. "
                    f"This language has {used} points, you can add {headroom} more.",
                    used=used,
                    cap=cap,
                    headroom=headroom,
                )
                self._log_rejection(rejection, user_id)
                return rejection

            rejection = await self._check_monthly_cap(user_id, points, period)
            if rejection:
                self._log_rejection(rejection, user_id)
                return rejection

            return BudgetDecision.accept()


class SlotBudgetValidator(BudgetValidator):
    """One vote per language, each point slot used once per month.

    Order: range, slot value, language already voted, slot already used,
    monthly cap.
    """

    SLOTS = (5, 3, 2)

    async def validate(
        self,
        user_id: UserId,
        language_id: LanguageId,
        points: int,
        period: Period,
    ) -> BudgetDecision:
        with logfire.span(
            "budget_validator.slot",
            user_id=str(user_id),
            language_id=str(language_id),
            points=points,
            period=str(period),
        ):
            rejection = self._check_range(points)
            if rejection:
                self._log_rejection(rejection, user_id)
                return rejection

            if points not in self.SLOTS:
                rejection = BudgetDecision.reject(
                    RejectionReason.INVALID_SLOT,
                    "Points must be one of "
                    + ", ".join(str(slot) for slot in self.SLOTS)
                    + ".",
                )
                self._log_rejection(rejection, user_id)
                return rejection

            if await self.tally_service.has_user_allocated_to_language(
                user_id, language_id, period
            ):
                used = await self.tally_service.monthly_points_for_user_language(
                    user_id, language_id, period
                )
                rejection = BudgetDecision.reject(
                    RejectionReason.ALREADY_ALLOCATED,
                    "You already voted for this language this month.",
                    used=used,
                    cap=self.caps.language_points,
                    headroom=0,
                )
                self._log_rejection(rejection, user_id)
                return rejection

            allocations = await self.tally_service.allocations_for_user(
                user_id, period
            )
            if any(allocation.points == points for allocation in allocations):
                rejection = BudgetDecision.reject(
                    RejectionReason.SLOT_TAKEN,
                    f"You already used your {points}-point vote this month.",
                )
                self._log_rejection(rejection, user_id)
                return rejection

            rejection = await self._check_monthly_cap(user_id, points, period)
            if rejection:
                self._log_rejection(rejection, user_id)
                return rejection

            return BudgetDecision.accept()
