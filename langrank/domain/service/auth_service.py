"""Authentication domain service."""

from langrank.domain.value import ExternalIdentity

from .base import Service


class OAuthClient:
    """OAuth client interface for the identity provider."""

    async def initiate_authorization(self, state: str) -> str:
        """Build the provider's authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str) -> ExternalIdentity:
        """Exchange an authorization code for the user's identity.

        Args:
            code: Authorization code from OAuth callback

        Returns:
            Identity reported by the provider
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for GitHub sign-in."""

    def __init__(self, oauth_client: OAuthClient) -> None:
        """Initialize auth service.

        Args:
            oauth_client: OAuth client implementation
        """
        self.oauth_client = oauth_client

    async def initiate_login(self, state: str) -> str:
        """Start the OAuth flow and return the URL to redirect to."""
        return await self.oauth_client.initiate_authorization(state)

    async def authenticate(self, code: str) -> ExternalIdentity:
        """Finish the OAuth flow.

        Args:
            code: Authorization code from OAuth callback

        Returns:
            Identity of the signed-in GitHub account

        Raises:
            GitHubOAuthError: If the code exchange or profile fetch fails
        """
        return await self.oauth_client.complete_authorization(code)
