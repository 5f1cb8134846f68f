"""List languages use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from langrank.config import VotingSettings
from langrank.domain.model import Language
from langrank.domain.service import LanguageService


class LanguageItem(BaseModel):
    """Language in API responses."""

    id: str
    name: str
    description: str | None
    color: str | None
    is_featured: bool
    total_points: int
    created_at: datetime

    @classmethod
    def from_language(cls, language: Language) -> "LanguageItem":
        return cls(
            id=str(language.id),
            name=language.name,
            description=language.description,
            color=language.color,
            is_featured=language.is_featured,
            total_points=language.total_points,
            created_at=language.created_at,
        )


class ListLanguagesResponse(BaseModel):
    """Languages split into the headline group and the rest."""

    top: list[LanguageItem]
    additional: list[LanguageItem]
    total: int


class ListLanguagesUseCase:
    """Use case for listing the catalog by lifetime points."""

    def __init__(
        self, language_service: LanguageService, voting_settings: VotingSettings
    ) -> None:
        """Initialize list languages use case.

        Args:
            language_service: Language domain service
            voting_settings: Voting settings (featured_count sets the split)
        """
        self.language_service = language_service
        self.voting_settings = voting_settings

    async def execute(self) -> ListLanguagesResponse:
        """List all languages, the first featured_count of them as top."""
        languages = await self.language_service.list_languages()
        items = [LanguageItem.from_language(language) for language in languages]
        split = self.voting_settings.featured_count

        logfire.info("Languages listed", total=len(items), top=min(split, len(items)))

        return ListLanguagesResponse(
            top=items[:split],
            additional=items[split:],
            total=len(items),
        )
