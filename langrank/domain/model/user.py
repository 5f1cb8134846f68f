"""User aggregate root.

Users sign in with GitHub. The GitHub account ID is the permanent link
between a login and a user row; display fields follow the GitHub profile.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from langrank.domain.model.common import DomainModel
from langrank.domain.value import UserId


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    external_id: str  # GitHub account ID, never changes
    display_name: str
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
