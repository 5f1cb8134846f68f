"""Dependency injection module."""

from typing import Type

from langrank.util.di.application import ProdApplicationProvider
from langrank.util.di.base import Component, ProviderBase
from langrank.util.di.core import ProdConfigProvider
from langrank.util.di.domain import ProdDomainProvider
from langrank.util.di.infrastructure import (
    GitHubProvider,
    PersistenceProvider,
    ProdGitHubProvider,
    ProdPersistenceProvider,
)
from langrank.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    GitHubProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get the provider class to instantiate for a base.

    - No subclasses: concrete provider, used directly
    - Has subclasses: swappable component, chosen by the __is_mock__ flag

    Args:
        base: Provider base class
        use_mock: Whether to use the test implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If the requested implementation is missing
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", None) or base.__name__
        raise DependencyInjectionError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure base classes
    "GitHubProvider",
    "PersistenceProvider",
    # Infrastructure implementations
    "ProdGitHubProvider",
    "ProdPersistenceProvider",
]
