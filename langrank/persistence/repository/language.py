"""PostgreSQL implementation of Language repository."""

from typing import List, Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from langrank.domain.model import Language
from langrank.domain.repository import LanguageRepository
from langrank.domain.value import LanguageId
from langrank.persistence.mappers import language_to_dict, row_to_language
from langrank.persistence.tables import languages_table


class PostgresLanguageRepository(LanguageRepository):
    """PostgreSQL implementation of LanguageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, language_id: LanguageId) -> Optional[Language]:
        """Find language by ID."""
        stmt = select(languages_table).where(languages_table.c.id == language_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_language(row._asdict()) if row else None

    async def find_by_name(self, name: str) -> Optional[Language]:
        """Find language by name."""
        stmt = select(languages_table).where(languages_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_language(row._asdict()) if row else None

    async def find_all(self) -> List[Language]:
        """Find all languages, highest lifetime points first."""
        stmt = select(languages_table).order_by(
            languages_table.c.total_points.desc(), languages_table.c.name
        )
        result = await self.session.execute(stmt)
        return [row_to_language(row._asdict()) for row in result.fetchall()]

    async def save(self, language: Language) -> Language:
        """Save or update a language."""
        language_dict = language_to_dict(language)

        existing = await self.find_by_id(language.id)

        if existing:
            stmt = (
                update(languages_table)
                .where(languages_table.c.id == language.id)
                .values(**language_dict)
            )
        else:
            stmt = insert(languages_table).values(**language_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return language

    async def update_total_points(self, language_id: LanguageId, total: int) -> None:
        """Overwrite the lifetime total of a language."""
        stmt = (
            update(languages_table)
            .where(languages_table.c.id == language_id)
            .values(total_points=total)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def count(self) -> int:
        """Count languages."""
        stmt = select(func.count()).select_from(languages_table)
        result = await self.session.execute(stmt)
        return result.scalar_one()
