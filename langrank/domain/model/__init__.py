"""Domain model entities for the language ranking."""

from langrank.domain.model.allocation import Allocation
from langrank.domain.model.language import Language
from langrank.domain.model.user import User

__all__ = [
    "User",
    "Language",
    "Allocation",
]
