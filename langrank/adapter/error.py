"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class GitHubOAuthError(ProviderError):
    """GitHub OAuth code exchange or profile fetch failed."""

    pass
