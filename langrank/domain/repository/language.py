"""Language repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from langrank.domain.model.language import Language
from langrank.domain.value import LanguageId


class LanguageRepository(ABC):
    """Repository interface for the language catalog."""

    @abstractmethod
    async def find_by_id(self, language_id: LanguageId) -> Optional[Language]:
        """Find language by ID.

        Args:
            language_id: Language identifier

        Returns:
            Language if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Language]:
        """Find language by its unique name."""
        pass

    @abstractmethod
    async def find_all(self) -> List[Language]:
        """Return every language, ordered by lifetime points then name.

        Returns:
            All languages, highest total_points first, ties by name
        """
        pass

    @abstractmethod
    async def save(self, language: Language) -> Language:
        """Save or update a language.

        Args:
            language: Language to save

        Returns:
            Saved language
        """
        pass

    @abstractmethod
    async def update_total_points(self, language_id: LanguageId, total: int) -> None:
        """Overwrite the denormalized lifetime total of a language.

        Args:
            language_id: Language identifier
            total: Lifetime total recomputed from the ledger
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count languages in the catalog."""
        pass
