"""GitHub OAuth client implementation.

Implements the OAuth web application flow: redirect to GitHub, exchange the
returned code for an access token, then read the account profile.
"""

from urllib.parse import urlencode

import httpx
import logfire

from langrank.adapter.error import GitHubOAuthError
from langrank.domain.service.auth_service import OAuthClient
from langrank.domain.value import ExternalIdentity


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGitHubOAuthClient(GitHubOAuthClient):
    """GitHub OAuth client talking to github.com."""

    authorize_url = "https://github.com/login/oauth/authorize"
    token_url = "https://github.com/login/oauth/access_token"
    user_info_url = "https://api.github.com/user"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> None:
        """Initialize GitHub OAuth client.

        Args:
            client_id: GitHub OAuth App client ID
            client_secret: GitHub OAuth App client secret
            redirect_uri: Callback URL registered with GitHub
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

    async def initiate_authorization(self, state: str) -> str:
        """Build the GitHub authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "read:user",
            "state": state,
        }

        logfire.info(
            "GitHub OAuth authorization initiated",
            redirect_uri=self.redirect_uri,
        )

        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str) -> ExternalIdentity:
        """Exchange the code and fetch the GitHub profile.

        Args:
            code: Authorization code from GitHub callback

        Returns:
            Identity keyed by the numeric GitHub account ID

        Raises:
            GitHubOAuthError: If OAuth flow fails
        """
        access_token = await self._exchange_code_for_token(code)
        user_info = await self._get_user_info(access_token)

        logfire.info(
            "GitHub OAuth completed",
            login=user_info["login"],
            github_id=user_info["id"],
        )

        return ExternalIdentity(
            external_id=str(user_info["id"]),
            display_name=user_info["login"],
            avatar_url=user_info.get("avatar_url"),
        )

    async def _exchange_code_for_token(self, code: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            GitHubOAuthError: If token exchange fails
        """
        payload = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    json=payload,
                    headers={"Accept": "application/json"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("GitHub token exchange HTTP error", error=str(e))
            raise GitHubOAuthError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "GitHub token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GitHubOAuthError(f"Token exchange failed: {response.status_code}")

        # GitHub reports bad codes with a 200 and an error field
        result = response.json()
        if result.get("error") or not result.get("access_token"):
            logfire.error("GitHub token exchange rejected", error=result.get("error"))
            raise GitHubOAuthError(result.get("error") or "No access token received")

        return result["access_token"]

    async def _get_user_info(self, access_token: str) -> dict:
        """Get the authenticated account from the GitHub API.

        Raises:
            GitHubOAuthError: If API request fails
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.user_info_url,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/vnd.github.v3+json",
                    },
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("GitHub user info HTTP error", error=str(e))
            raise GitHubOAuthError(f"HTTP error fetching user info: {e}")

        if response.status_code != 200:
            logfire.error(
                "GitHub user info request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GitHubOAuthError(f"User info request failed: {response.status_code}")

        return response.json()


class MockGitHubOAuthClient(GitHubOAuthClient):
    """Mock GitHub OAuth client for testing.

    Each authorization code maps to its own deterministic account, so tests
    can sign in several users by using different codes. The code "invalid"
    fails the way a rejected GitHub exchange does.
    """

    INVALID_CODE = "invalid"

    async def initiate_authorization(self, state: str) -> str:
        return f"https://github.com/login/oauth/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str) -> ExternalIdentity:
        if code == self.INVALID_CODE:
            raise GitHubOAuthError("bad_verification_code")

        return ExternalIdentity(
            external_id=f"mock-{code}",
            display_name=f"mockuser-{code}",
            avatar_url="https://example.com/avatar.png",
        )
