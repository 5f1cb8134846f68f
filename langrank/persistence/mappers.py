"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic objects, so rows are mapped by hand
instead of through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict
from uuid import UUID

from langrank.domain.model import Allocation, Language, User
from langrank.domain.value import AllocationId, LanguageId, Period, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        external_id=row["external_id"],
        display_name=row["display_name"],
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_language(row: Dict[str, Any]) -> Language:
    """Convert database row to Language domain model."""
    return Language(
        id=LanguageId(_uuid(row["id"])),
        name=row["name"],
        description=row.get("description"),
        color=row.get("color"),
        is_featured=row.get("is_featured", False),
        total_points=row.get("total_points", 0),
        created_at=row["created_at"],
    )


def language_to_dict(language: Language) -> Dict[str, Any]:
    """Convert Language domain model to database dict."""
    return language.model_dump()


def row_to_allocation(row: Dict[str, Any]) -> Allocation:
    """Convert database row to Allocation domain model."""
    return Allocation(
        id=AllocationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        language_id=LanguageId(_uuid(row["language_id"])),
        points=row["points"],
        period=Period(row["period"]),
        created_at=row["created_at"],
    )
