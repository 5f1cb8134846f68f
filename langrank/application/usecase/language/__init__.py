"""Language use cases."""

from .get_language_stats import (
    GetLanguageStatsRequest,
    GetLanguageStatsResponse,
    GetLanguageStatsUseCase,
)
from .list_languages import LanguageItem, ListLanguagesResponse, ListLanguagesUseCase

__all__ = [
    "GetLanguageStatsRequest",
    "GetLanguageStatsResponse",
    "GetLanguageStatsUseCase",
    "LanguageItem",
    "ListLanguagesResponse",
    "ListLanguagesUseCase",
]
