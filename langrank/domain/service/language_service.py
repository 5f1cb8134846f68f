"""Language catalog domain service."""

import logfire

from langrank.domain.error import NotFoundError
from langrank.domain.model import Language
from langrank.domain.repository import LanguageRepository
from langrank.domain.value import LanguageId

from .base import Service


class LanguageService(Service):
    """Domain service for reading the language catalog."""

    def __init__(self, language_repository: LanguageRepository) -> None:
        """Initialize language service.

        Args:
            language_repository: Language repository
        """
        self.language_repository = language_repository

    async def get_by_id(self, language_id: LanguageId) -> Language:
        """Get a language by ID.

        Raises:
            NotFoundError: If the language does not exist
        """
        with logfire.span("language_service.get_by_id", language_id=str(language_id)):
            language = await self.language_repository.find_by_id(language_id)
            if not language:
                logfire.warn("Language not found", language_id=str(language_id))
                raise NotFoundError("Language", str(language_id))
            return language

    async def list_languages(self) -> list[Language]:
        """All languages, highest lifetime points first."""
        with logfire.span("language_service.list_languages"):
            languages = await self.language_repository.find_all()
            logfire.info("Languages listed", count=len(languages))
            return languages

    async def count(self) -> int:
        return await self.language_repository.count()
