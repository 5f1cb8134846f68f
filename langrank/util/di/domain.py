"""Domain layer DI providers."""

from dishka import Scope, provide

from langrank.adapter.github import GitHubOAuthClient
from langrank.config import AuthSettings, VotingSettings
from langrank.domain.repository import (
    AllocationRepository,
    LanguageRepository,
    UserRepository,
)
from langrank.domain.service import (
    AuthService,
    BudgetValidator,
    CumulativeBudgetValidator,
    JWTService,
    LanguageService,
    RankingService,
    SlotBudgetValidator,
    TallyService,
    UserService,
    VoteService,
)
from langrank.domain.value import BudgetCaps, BudgetStrategy
from langrank.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, oauth_client: GitHubOAuthClient) -> AuthService:
        """Provide GitHub authentication domain service."""
        return AuthService(oauth_client=oauth_client)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_language_service(
        self, language_repository: LanguageRepository
    ) -> LanguageService:
        """Provide language domain service."""
        return LanguageService(language_repository=language_repository)

    @provide
    def get_tally_service(
        self, allocation_repository: AllocationRepository
    ) -> TallyService:
        """Provide aggregation queries."""
        return TallyService(allocation_repository=allocation_repository)

    @provide
    def get_budget_validator(
        self,
        tally_service: TallyService,
        caps: BudgetCaps,
        voting: VotingSettings,
    ) -> BudgetValidator:
        """Provide the budget rule set selected by VOTING__STRATEGY."""
        if BudgetStrategy(voting.strategy) == BudgetStrategy.SLOT:
            return SlotBudgetValidator(tally_service=tally_service, caps=caps)
        return CumulativeBudgetValidator(tally_service=tally_service, caps=caps)

    @provide
    def get_vote_service(
        self,
        allocation_repository: AllocationRepository,
        language_repository: LanguageRepository,
        user_repository: UserRepository,
        tally_service: TallyService,
        budget_validator: BudgetValidator,
        caps: BudgetCaps,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            allocation_repository=allocation_repository,
            language_repository=language_repository,
            user_repository=user_repository,
            tally_service=tally_service,
            budget_validator=budget_validator,
            caps=caps,
        )

    @provide
    def get_ranking_service(
        self,
        language_repository: LanguageRepository,
        allocation_repository: AllocationRepository,
    ) -> RankingService:
        """Provide ranking domain service."""
        return RankingService(
            language_repository=language_repository,
            allocation_repository=allocation_repository,
        )
