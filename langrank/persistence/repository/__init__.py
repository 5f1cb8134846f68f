"""PostgreSQL repository implementations."""

from langrank.persistence.repository.allocation import PostgresAllocationRepository
from langrank.persistence.repository.language import PostgresLanguageRepository
from langrank.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresLanguageRepository",
    "PostgresAllocationRepository",
]
