"""Get language stats use case."""

from uuid import UUID

from pydantic import BaseModel

from langrank.domain.error import NotFoundError
from langrank.domain.service import LanguageService
from langrank.domain.value import LanguageId

from .list_languages import LanguageItem


class GetLanguageStatsRequest(BaseModel):
    """Get language stats request."""

    language_id: str  # UUID string


class GetLanguageStatsResponse(BaseModel):
    """Lifetime stats for one language."""

    language: LanguageItem
    total_points: int


class GetLanguageStatsUseCase:
    """Use case for a language's lifetime total."""

    def __init__(self, language_service: LanguageService) -> None:
        """Initialize get language stats use case.

        Args:
            language_service: Language domain service
        """
        self.language_service = language_service

    async def execute(self, request: GetLanguageStatsRequest) -> GetLanguageStatsResponse:
        """Load the language and its lifetime points.

        Raises:
            NotFoundError: If the language does not exist or the ID is malformed
        """
        try:
            language_id = LanguageId(UUID(request.language_id))
        except ValueError:
            raise NotFoundError("Language", request.language_id)

        language = await self.language_service.get_by_id(language_id)

        return GetLanguageStatsResponse(
            language=LanguageItem.from_language(language),
            total_points=language.total_points,
        )
