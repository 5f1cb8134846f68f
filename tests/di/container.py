"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from langrank.util.di import PROVIDERS, Component, get_provider


def build_test_container(
    unmock: set[Component] | None = None,
    overrides: list[Provider] | None = None,
) -> AsyncContainer:
    """Build test container with selective unmocking.

    Args:
        unmock: Components to use production implementations for.
                All others use mocks.

    Returns:
        Configured test container, usable directly or passed to create_app

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # Unit and E2E tests - all mocks
        container = build_test_container()

        # Integration tests - real persistence
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        component_name = getattr(base, "__mock_component__", None)
        if not base.__subclasses__() or component_name is None:
            provider_class = get_provider(base, use_mock=False)
        else:
            provider_class = get_provider(base, use_mock=component_name not in unmock)

        provider_instances.append(provider_class())

    provider_instances.extend(overrides or [])

    return make_async_container(*provider_instances, FastapiProvider())


def _validate_unmock(unmock: set[Component]) -> None:
    """Reject component names no provider declares."""
    known = {
        getattr(p, "__mock_component__")
        for p in PROVIDERS
        if getattr(p, "__mock_component__", None)
    }

    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
