"""Allocation entity.

An allocation is one recorded spend of points by a user on a language in a
period. The ledger is append-only: allocations are never updated or deleted,
and every aggregate is derived from it.
"""

from datetime import datetime, timezone

from pydantic import Field

from langrank.domain.model.common import DomainModel
from langrank.domain.value import AllocationId, LanguageId, Period, UserId


class Allocation(DomainModel):
    """Allocation entity.

    Business rules:
    - points is an integer in [1, 5]
    - several allocations may exist for the same user, language and period
      (top-ups) as long as the budget caps hold
    """

    id: AllocationId
    user_id: UserId
    language_id: LanguageId
    points: int = Field(ge=1, le=5)
    period: Period
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
