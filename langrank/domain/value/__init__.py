"""Domain value objects for the language ranking."""

from langrank.domain.value.identifiers import AllocationId, LanguageId, UserId
from langrank.domain.value.types import (
    LIFETIME,
    BudgetCaps,
    BudgetDecision,
    BudgetStrategy,
    ExternalIdentity,
    MonthlyPoints,
    Period,
    PeriodStats,
    RankingScope,
    RejectionReason,
)

__all__ = [
    # Identifiers
    "UserId",
    "LanguageId",
    "AllocationId",
    # Types
    "Period",
    "LIFETIME",
    "RankingScope",
    "BudgetStrategy",
    "BudgetCaps",
    "BudgetDecision",
    "RejectionReason",
    "MonthlyPoints",
    "PeriodStats",
    "ExternalIdentity",
]
