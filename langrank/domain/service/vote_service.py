"""Vote domain service."""

from datetime import datetime, timezone
from typing import Literal, Optional, Union
from uuid import uuid4

import logfire
from sqlalchemy.exc import SQLAlchemyError

from langrank.domain.error import NotFoundError, TransientStoreError
from langrank.domain.model import Allocation
from langrank.domain.repository import (
    AllocationRepository,
    LanguageRepository,
    UserRepository,
)
from langrank.domain.value import (
    AllocationId,
    BudgetCaps,
    BudgetDecision,
    LanguageId,
    Period,
    RejectionReason,
    UserId,
)
from langrank.domain.value.common import ValueObject

from .base import Service
from .budget_validator import BudgetValidator
from .tally_service import TallyService


class VoteAccepted(ValueObject):
    """Successful vote with the post-write budget state."""

    accepted: Literal[True] = True
    allocation_id: AllocationId
    language_id: LanguageId
    points: int
    period: Period
    remaining_monthly_points: int
    language_points_after: int  # This user's points on the language this period
    language_total_points: int  # Lifetime total across all users


class VoteRejected(ValueObject):
    """Refused vote carrying the validator's reason verbatim."""

    accepted: Literal[False] = False
    reason: RejectionReason
    message: str
    used: Optional[int] = None
    cap: Optional[int] = None
    headroom: Optional[int] = None

    @classmethod
    def from_decision(cls, decision: BudgetDecision) -> "VoteRejected":
        return cls(
            reason=decision.reason,
            message=decision.message,
            used=decision.used,
            cap=decision.cap,
            headroom=decision.headroom,
        )


VoteResult = Union[VoteAccepted, VoteRejected]


class VoteService(Service):
    """Domain service for recording votes.

    A vote validates the request against the user's budget, appends an
    allocation and refreshes the language's lifetime total. All three steps
    run inside AllocationRepository.atomic for the voting user, so two
    concurrent votes by the same user cannot both pass validation against
    the same budget. The block commits on exit, so VoteAccepted is only
    built once the allocation is durable.
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        allocation_repository: AllocationRepository,
        language_repository: LanguageRepository,
        user_repository: UserRepository,
        tally_service: TallyService,
        budget_validator: BudgetValidator,
        caps: BudgetCaps,
    ) -> None:
        """Initialize vote service.

        Args:
            allocation_repository: Allocation ledger repository
            language_repository: Language repository
            user_repository: User repository
            tally_service: Aggregation queries
            budget_validator: Budget rule set in force
            caps: Budget ceilings, also enforced by the conditional append
        """
        self.allocation_repository = allocation_repository
        self.language_repository = language_repository
        self.user_repository = user_repository
        self.tally_service = tally_service
        self.budget_validator = budget_validator
        self.caps = caps

    async def submit_vote(
        self,
        user_id: UserId,
        language_id: LanguageId,
        points: int,
        period: Period,
    ) -> VoteResult:
        """Spend points on a language.

        Args:
            user_id: Voting user
            language_id: Language receiving the points
            points: Points to add
            period: Month the points count against

        Returns:
            VoteAccepted with remaining budget, or VoteRejected with the reason

        Raises:
            NotFoundError: If the user or language does not exist
            TransientStoreError: If the write failed twice
        """
        with logfire.span(
            "vote_service.submit_vote",
            user_id=str(user_id),
            language_id=str(language_id),
            points=points,
            period=str(period),
        ):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("Vote by unknown user", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))

            language = await self.language_repository.find_by_id(language_id)
            if not language:
                logfire.warn("Vote on non-existent language", language_id=str(language_id))
                raise NotFoundError("Language", str(language_id))

            last_error: Exception | None = None
            for attempt in range(1, self.MAX_ATTEMPTS + 1):
                try:
                    return await self._record(user_id, language_id, points, period)
                except (TransientStoreError, SQLAlchemyError) as e:
                    # Retry re-validates, since the budget may have moved
                    last_error = e
                    logfire.warn(
                        "Vote write failed",
                        attempt=attempt,
                        user_id=str(user_id),
                        language_id=str(language_id),
                        error=str(e),
                    )

            logfire.error(
                "Vote write failed after retry",
                user_id=str(user_id),
                language_id=str(language_id),
                error=str(last_error),
            )
            raise TransientStoreError(
                "Failed to record vote. Please try again."
            ) from last_error

    async def _record(
        self,
        user_id: UserId,
        language_id: LanguageId,
        points: int,
        period: Period,
    ) -> VoteResult:
        async with self.allocation_repository.atomic(user_id):
            decision = await self.budget_validator.validate(
                user_id, language_id, points, period
            )
            if not decision.accepted:
                return VoteRejected.from_decision(decision)

            allocation = Allocation(
                id=AllocationId(uuid4()),
                user_id=user_id,
                language_id=language_id,
                points=points,
                period=period,
                created_at=datetime.now(timezone.utc),
            )
            saved = await self.allocation_repository.append(allocation, self.caps)

            # Lifetime total is rewritten from the ledger, never incremented
            total = await self.allocation_repository.lifetime_total_for_language(
                language_id
            )
            await self.language_repository.update_total_points(language_id, total)

            monthly = await self.tally_service.monthly_points_for_user(
                user_id, period
            )
            language_points = await self.tally_service.monthly_points_for_user_language(
                user_id, language_id, period
            )

        logfire.info(
            "Vote recorded",
            allocation_id=str(saved.id),
            user_id=str(user_id),
            language_id=str(language_id),
            points=points,
            monthly_total=monthly.total_points,
            language_total=total,
        )

        return VoteAccepted(
            allocation_id=saved.id,
            language_id=language_id,
            points=points,
            period=period,
            remaining_monthly_points=max(
                0, self.caps.monthly_points - monthly.total_points
            ),
            language_points_after=language_points,
            language_total_points=total,
        )
