"""Language entity.

Languages form the fixed catalog users spend points on. They are seeded by
migration and never deleted.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from langrank.domain.model.common import DomainModel
from langrank.domain.value import LanguageId


class Language(DomainModel):
    """Language entity.

    total_points is the denormalized lifetime total. It is recomputed from
    the allocation ledger in the same transaction as every accepted vote.
    """

    id: LanguageId
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = None  # Hex color used by the frontend
    is_featured: bool = False
    total_points: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
