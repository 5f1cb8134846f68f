"""Fixtures for E2E tests against the in-memory container."""

import asyncio

import pytest
from dishka import AsyncContainer
from fastapi.testclient import TestClient

from langrank.domain.repository import LanguageRepository
from langrank.interface.api.app import create_app
from tests.conftest import make_language
from tests.di import build_test_container

SEEDED = ("Rust", "Go", "Python", "COBOL")


@pytest.fixture
def container() -> AsyncContainer:
    return build_test_container()


@pytest.fixture
def languages(container: AsyncContainer) -> dict[str, str]:
    """Seed the catalogue and return language IDs by name."""

    async def _seed() -> dict[str, str]:
        repo = await container.get(LanguageRepository)
        return {
            name: str((await make_language(repo, name)).id) for name in SEEDED
        }

    return asyncio.run(_seed())


@pytest.fixture
def client(container: AsyncContainer, languages):
    with TestClient(create_app(container=container)) as test_client:
        yield test_client

