"""In-memory repository implementations for testing."""

from .allocation import InMemoryAllocationRepository
from .language import InMemoryLanguageRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAllocationRepository",
    "InMemoryLanguageRepository",
    "InMemoryUserRepository",
]
