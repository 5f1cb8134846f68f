"""Strongly typed identifiers for ranking domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
LanguageId = NewType("LanguageId", UUID)
AllocationId = NewType("AllocationId", UUID)
