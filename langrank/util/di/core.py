"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from langrank.config import AuthSettings, Settings, VotingSettings
from langrank.domain.value import BudgetCaps
from langrank.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        """Provide voting settings."""
        return settings.voting

    @provide(scope=Scope.APP)
    def provide_budget_caps(self, voting: VotingSettings) -> BudgetCaps:
        """Provide budget caps built from voting settings."""
        return BudgetCaps(
            monthly_points=voting.monthly_points,
            language_points=voting.language_points,
            max_points=voting.max_points_per_vote,
        )
