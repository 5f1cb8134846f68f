"""Unit tests for GitHub provider configuration checks."""

import pytest
from dishka import Provider, Scope, make_async_container

from langrank.adapter.github import GitHubOAuthClient
from langrank.config import AuthSettings, GitHubOAuthSettings, Settings
from langrank.util.di.infrastructure.github import ProdGitHubProvider
from langrank.util.error import ConfigurationError


async def resolve_client(client_id: str, client_secret: str) -> GitHubOAuthClient:
    settings = Settings(
        auth=AuthSettings(
            github=GitHubOAuthSettings(client_id=client_id, client_secret=client_secret)
        )
    )
    context_provider = Provider()
    context_provider.from_context(provides=Settings, scope=Scope.APP)

    container = make_async_container(
        context_provider, ProdGitHubProvider(), context={Settings: settings}
    )
    try:
        return await container.get(GitHubOAuthClient)
    finally:
        await container.close()


class TestProdGitHubProvider:
    """Tests for credential validation."""

    @pytest.mark.asyncio
    async def test_placeholder_client_id_is_refused(self):
        with pytest.raises(ConfigurationError) as exc_info:
            await resolve_client("CHANGE_ME_IN_PRODUCTION", "secret")
        assert exc_info.value.setting == "AUTH__GITHUB__CLIENT_ID"

    @pytest.mark.asyncio
    async def test_empty_secret_is_refused(self):
        with pytest.raises(ConfigurationError) as exc_info:
            await resolve_client("Iv1.abc", "")
        assert exc_info.value.setting == "AUTH__GITHUB__CLIENT_SECRET"

    @pytest.mark.asyncio
    async def test_configured_credentials_build_client(self):
        client = await resolve_client("Iv1.abc", "s3cret")

        assert client.client_id == "Iv1.abc"
        assert client.redirect_uri.endswith("/auth/callback")
