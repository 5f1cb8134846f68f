"""Mock providers for testing."""

from .github import MockGitHubProvider
from .persistence import MockPersistenceProvider, UncommittableAllocationRepository
from .container import build_test_container

__all__ = [
    "MockGitHubProvider",
    "MockPersistenceProvider",
    "UncommittableAllocationRepository",
    "build_test_container",
]
