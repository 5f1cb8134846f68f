"""Domain value objects for the language ranking.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and the budget arithmetic shared by
validators, services and responses.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from langrank.domain.value.common import RootValueObject, ValueObject


class Period(RootValueObject[str]):
    """Calendar-month key scoping budget caps.

    Format: YYYY-MM, e.g. '2025-01'.
    """

    @field_validator("root")
    @classmethod
    def validate_period_format(cls, v: str) -> str:
        """Validate period is a YYYY-MM month key."""
        if not re.match(r"^\d{4}-(0[1-9]|1[0-2])$", v):
            raise ValueError("Period must be a month key in YYYY-MM format")
        return v

    @classmethod
    def from_datetime(cls, moment: datetime) -> "Period":
        """Build the period containing the given moment (UTC for aware values)."""
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return cls(moment.strftime("%Y-%m"))

    @classmethod
    def current(cls) -> "Period":
        """Period for the current UTC month."""
        return cls.from_datetime(datetime.now(timezone.utc))


LIFETIME: Literal["lifetime"] = "lifetime"

# A ranking is either all-time or scoped to one period
RankingScope = Union[Period, Literal["lifetime"]]


class BudgetStrategy(str, Enum):
    """Budget validation rule set."""

    CUMULATIVE = "cumulative"  # Top-ups allowed, per-language and monthly caps
    SLOT = "slot"  # Fixed 5/3/2 slots, one vote per language


class RejectionReason(str, Enum):
    """Machine-readable reason a proposed allocation was refused."""

    POINTS_OUT_OF_RANGE = "points_out_of_range"
    LANGUAGE_CAP_EXCEEDED = "language_cap_exceeded"
    MONTHLY_CAP_EXCEEDED = "monthly_cap_exceeded"
    INVALID_SLOT = "invalid_slot"
    SLOT_TAKEN = "slot_taken"
    ALREADY_ALLOCATED = "already_allocated"


class BudgetCaps(ValueObject):
    """Point ceilings applied to every user in every period."""

    monthly_points: int = Field(default=10, ge=1)
    language_points: int = Field(default=5, ge=1)
    min_points: int = Field(default=1, ge=1)
    max_points: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def validate_bounds(self) -> "BudgetCaps":
        """Single-vote bounds must fit inside both caps."""
        if self.min_points > self.max_points:
            raise ValueError("min_points cannot exceed max_points")
        if self.max_points > self.language_points:
            raise ValueError("max_points cannot exceed language_points")
        if self.language_points > self.monthly_points:
            raise ValueError("language_points cannot exceed monthly_points")
        return self


class BudgetDecision(ValueObject):
    """Outcome of validating a proposed allocation.

    Rejections carry enough context (used, cap, headroom) for a client to
    explain the refusal without guessing.
    """

    accepted: bool
    reason: Optional[RejectionReason] = None
    message: Optional[str] = None
    used: Optional[int] = None
    cap: Optional[int] = None
    headroom: Optional[int] = None

    @classmethod
    def accept(cls) -> "BudgetDecision":
        return cls(accepted=True)

    @classmethod
    def reject(
        cls,
        reason: RejectionReason,
        message: str,
        used: Optional[int] = None,
        cap: Optional[int] = None,
        headroom: Optional[int] = None,
    ) -> "BudgetDecision":
        return cls(
            accepted=False,
            reason=reason,
            message=message,
            used=used,
            cap=cap,
            headroom=headroom,
        )


class MonthlyPoints(ValueObject):
    """Points a user has spent in one period."""

    total_points: int = Field(default=0, ge=0)
    allocation_count: int = Field(default=0, ge=0)


class PeriodStats(ValueObject):
    """Platform-wide activity for one period."""

    total_allocations: int = 0
    total_users: int = 0
    total_points: int = 0


class ExternalIdentity(ValueObject):
    """User information returned by the identity provider."""

    external_id: str  # Permanent GitHub account ID
    display_name: str  # GitHub login, may change over time
    avatar_url: str | None = None
