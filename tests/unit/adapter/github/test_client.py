"""Unit tests for the GitHub OAuth clients."""

from urllib.parse import parse_qs, urlparse

import pytest

from langrank.adapter.error import GitHubOAuthError
from langrank.adapter.github import MockGitHubOAuthClient, RealGitHubOAuthClient


class TestRealGitHubOAuthClient:
    """Tests that need no network."""

    @pytest.mark.asyncio
    async def test_authorization_url_carries_state_and_callback(self):
        # Arrange
        client = RealGitHubOAuthClient(
            client_id="Iv1.abc",
            client_secret="secret",
            redirect_uri="http://localhost:8000/auth/callback",
        )

        # Act
        url = await client.initiate_authorization("xyz")

        # Assert
        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert parsed.netloc == "github.com"
        assert params["client_id"] == ["Iv1.abc"]
        assert params["state"] == ["xyz"]
        assert params["redirect_uri"] == ["http://localhost:8000/auth/callback"]
        assert params["scope"] == ["read:user"]


class TestMockGitHubOAuthClient:
    """Tests for the deterministic test client."""

    @pytest.mark.asyncio
    async def test_each_code_is_its_own_account(self):
        client = MockGitHubOAuthClient()

        alice = await client.complete_authorization("alice")
        bob = await client.complete_authorization("bob")

        assert alice.external_id == "mock-alice"
        assert alice.external_id != bob.external_id

    @pytest.mark.asyncio
    async def test_invalid_code_fails(self):
        with pytest.raises(GitHubOAuthError):
            await MockGitHubOAuthClient().complete_authorization("invalid")

    @pytest.mark.asyncio
    async def test_identity_carries_only_persisted_fields(self):
        identity = await MockGitHubOAuthClient().complete_authorization("carol")

        assert identity.model_dump() == {
            "external_id": "mock-carol",
            "display_name": "mockuser-carol",
            "avatar_url": "https://example.com/avatar.png",
        }
