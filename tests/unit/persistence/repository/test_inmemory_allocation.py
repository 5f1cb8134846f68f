"""Unit tests for the in-memory allocation ledger."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from langrank.domain.error import ConcurrencyConflictError
from langrank.domain.model import Allocation
from langrank.domain.value import AllocationId, BudgetCaps, LanguageId, Period, UserId
from langrank.persistence.repository.inmemory import InMemoryAllocationRepository

PERIOD = Period("2025-08")


def allocation(user_id: UserId, language_id: LanguageId, points: int) -> Allocation:
    return Allocation(
        id=AllocationId(uuid4()),
        user_id=user_id,
        language_id=language_id,
        points=points,
        period=PERIOD,
        created_at=datetime.now(timezone.utc),
    )


class TestInMemoryAllocationRepository:
    """Tests for append and atomic."""

    @pytest.mark.asyncio
    async def test_append_refuses_to_exceed_language_cap(self):
        # Arrange
        repo = InMemoryAllocationRepository()
        user_id, language_id = UserId(uuid4()), LanguageId(uuid4())
        await repo.append(allocation(user_id, language_id, 4), BudgetCaps())

        # Act & Assert
        with pytest.raises(ConcurrencyConflictError):
            await repo.append(allocation(user_id, language_id, 2), BudgetCaps())
        assert await repo.monthly_points_for_user_language(
            user_id, language_id, PERIOD
        ) == 4

    @pytest.mark.asyncio
    async def test_atomic_discards_appends_when_block_fails(self):
        # Arrange
        repo = InMemoryAllocationRepository()
        user_id = UserId(uuid4())
        other = UserId(uuid4())
        await repo.append(allocation(user_id, LanguageId(uuid4()), 1), BudgetCaps())

        # Act
        with pytest.raises(RuntimeError):
            async with repo.atomic(user_id):
                await repo.append(
                    allocation(user_id, LanguageId(uuid4()), 2), BudgetCaps()
                )
                await repo.append(allocation(other, LanguageId(uuid4()), 3), BudgetCaps())
                raise RuntimeError("boom")

        # Assert
        assert (await repo.monthly_points_for_user(user_id, PERIOD)).total_points == 1
        assert (await repo.monthly_points_for_user(other, PERIOD)).total_points == 3
