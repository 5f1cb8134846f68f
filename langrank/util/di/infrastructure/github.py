"""GitHub infrastructure providers."""

from dishka import Scope, provide

from langrank.adapter.github import GitHubOAuthClient, RealGitHubOAuthClient
from langrank.config import Settings
from langrank.util.di.base import ProviderBase
from langrank.util.error import ConfigurationError

PLACEHOLDER = "CHANGE_ME_IN_PRODUCTION"


class GitHubProvider(ProviderBase):
    """GitHub component base."""

    __mock_component__ = "github"


class ProdGitHubProvider(GitHubProvider):
    """Production GitHub provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_github_oauth_client(self, settings: Settings) -> GitHubOAuthClient:
        """Provide GitHub OAuth client.

        Raises:
            ConfigurationError: If GitHub OAuth credentials are not configured
        """
        github = settings.auth.github
        if not github.client_id or github.client_id == PLACEHOLDER:
            raise ConfigurationError(
                "AUTH__GITHUB__CLIENT_ID", "GitHub OAuth client ID must be configured"
            )
        if not github.client_secret or github.client_secret == PLACEHOLDER:
            raise ConfigurationError(
                "AUTH__GITHUB__CLIENT_SECRET",
                "GitHub OAuth client secret must be configured",
            )

        return RealGitHubOAuthClient(
            client_id=github.client_id,
            client_secret=github.client_secret,
            redirect_uri=settings.auth.github_callback_url,
        )
