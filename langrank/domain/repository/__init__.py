"""Repository interfaces for the ranking domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from langrank.domain.repository.allocation import AllocationRepository
from langrank.domain.repository.language import LanguageRepository
from langrank.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "LanguageRepository",
    "AllocationRepository",
]
