"""In-memory language repository for testing."""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from langrank.domain.model.language import Language
from langrank.domain.repository.language import LanguageRepository
from langrank.domain.value import LanguageId


class InMemoryLanguageRepository(LanguageRepository):
    """In-memory implementation of LanguageRepository for testing."""

    def __init__(self) -> None:
        self._languages: dict[LanguageId, Language] = {}

    async def find_by_id(self, language_id: LanguageId) -> Optional[Language]:
        """Find language by ID."""
        return self._languages.get(language_id)

    async def find_by_name(self, name: str) -> Optional[Language]:
        """Find language by name."""
        for language in self._languages.values():
            if language.name == name:
                return language
        return None

    async def find_all(self) -> List[Language]:
        """All languages, highest lifetime points first, ties by name."""
        return sorted(
            self._languages.values(),
            key=lambda language: (-language.total_points, language.name),
        )

    async def save(self, language: Language) -> Language:
        """Save or update a language.

        Raises:
            IntegrityError: If another language already has this name
        """
        for other in self._languages.values():
            if other.name == language.name and other.id != language.id:
                raise IntegrityError("Duplicate language name", None, Exception())

        self._languages[language.id] = language
        return language

    async def update_total_points(self, language_id: LanguageId, total: int) -> None:
        """Overwrite a language's lifetime total."""
        language = self._languages.get(language_id)
        if language:
            self._languages[language_id] = language.model_copy(
                update={"total_points": total}
            )

    async def count(self) -> int:
        return len(self._languages)
