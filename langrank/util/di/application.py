"""Application layer DI providers."""

from dishka import Scope, provide

from langrank.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from langrank.application.usecase.language import (
    GetLanguageStatsUseCase,
    ListLanguagesUseCase,
)
from langrank.application.usecase.ranking import GetRankingUseCase
from langrank.application.usecase.stats import GetStatsUseCase
from langrank.application.usecase.vote import GetMonthlyStateUseCase, SubmitVoteUseCase
from langrank.config import VotingSettings
from langrank.domain.repository import AllocationRepository
from langrank.domain.service import (
    AuthService,
    JWTService,
    LanguageService,
    RankingService,
    TallyService,
    UserService,
    VoteService,
)
from langrank.domain.value import BudgetCaps
from langrank.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_vote_use_case(self, vote_service: VoteService) -> SubmitVoteUseCase:
        """Provide submit vote use case."""
        return SubmitVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_monthly_state_use_case(
        self, tally_service: TallyService, caps: BudgetCaps
    ) -> GetMonthlyStateUseCase:
        """Provide monthly state use case."""
        return GetMonthlyStateUseCase(tally_service=tally_service, caps=caps)

    # Ranking and catalog use cases
    @provide(scope=Scope.REQUEST)
    def get_ranking_use_case(
        self, ranking_service: RankingService, tally_service: TallyService
    ) -> GetRankingUseCase:
        """Provide ranking use case."""
        return GetRankingUseCase(
            ranking_service=ranking_service, tally_service=tally_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_languages_use_case(
        self, language_service: LanguageService, voting: VotingSettings
    ) -> ListLanguagesUseCase:
        """Provide list languages use case."""
        return ListLanguagesUseCase(
            language_service=language_service, voting_settings=voting
        )

    @provide(scope=Scope.REQUEST)
    def get_language_stats_use_case(
        self, language_service: LanguageService
    ) -> GetLanguageStatsUseCase:
        """Provide language stats use case."""
        return GetLanguageStatsUseCase(language_service=language_service)

    # Stats use cases
    @provide(scope=Scope.REQUEST)
    def get_stats_use_case(
        self,
        user_service: UserService,
        language_service: LanguageService,
        tally_service: TallyService,
        allocation_repository: AllocationRepository,
    ) -> GetStatsUseCase:
        """Provide platform stats use case."""
        return GetStatsUseCase(
            user_service=user_service,
            language_service=language_service,
            tally_service=tally_service,
            allocation_repository=allocation_repository,
        )
