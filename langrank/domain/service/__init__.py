"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .budget_validator import (
    BudgetValidator,
    CumulativeBudgetValidator,
    SlotBudgetValidator,
)
from .jwt_service import JWTService
from .language_service import LanguageService
from .ranking_service import RankingEntry, RankingService
from .tally_service import MonthlyState, TallyService
from .user_service import UserService
from .vote_service import VoteAccepted, VoteRejected, VoteResult, VoteService

__all__ = [
    "AuthService",
    "BudgetValidator",
    "CumulativeBudgetValidator",
    "JWTService",
    "LanguageService",
    "MonthlyState",
    "OAuthClient",
    "RankingEntry",
    "RankingService",
    "Service",
    "SlotBudgetValidator",
    "TallyService",
    "UserService",
    "VoteAccepted",
    "VoteRejected",
    "VoteResult",
    "VoteService",
]
