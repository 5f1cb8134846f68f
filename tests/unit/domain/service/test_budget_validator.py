"""Unit tests for the budget validators."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from langrank.domain.model import Allocation
from langrank.domain.repository import AllocationRepository
from langrank.domain.service import (
    CumulativeBudgetValidator,
    SlotBudgetValidator,
    TallyService,
)
from langrank.domain.value import (
    AllocationId,
    BudgetCaps,
    LanguageId,
    Period,
    RejectionReason,
    UserId,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

PERIOD = Period("2025-03")


async def spend(
    repo: AllocationRepository,
    user_id: UserId,
    language_id: LanguageId,
    points: int,
    period: Period = PERIOD,
) -> None:
    await repo.append(
        Allocation(
            id=AllocationId(uuid4()),
            user_id=user_id,
            language_id=language_id,
            points=points,
            period=period,
            created_at=datetime.now(timezone.utc),
        ),
        BudgetCaps(),
    )


class TestCumulativeBudgetValidator:
    """Tests for the top-up rules."""

    @pytest.mark.asyncio
    async def test_first_vote_within_caps_is_accepted(self, unit_env):
        """A fresh user can spend up to the per-vote maximum."""
        # Arrange
        tally = await unit_env.get(TallyService)
        validator = CumulativeBudgetValidator(tally, BudgetCaps())

        # Act
        decision = await validator.validate(
            UserId(uuid4()), LanguageId(uuid4()), 5, PERIOD
        )

        # Assert
        assert decision.accepted is True
        assert decision.reason is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("points", [0, -1, 6, 100])
    async def test_points_outside_range_are_rejected(self, unit_env, points):
        """Points below 1 or above 5 are refused before any cap is read."""
        # Arrange
        tally = await unit_env.get(TallyService)
        validator = CumulativeBudgetValidator(tally, BudgetCaps())

        # Act
        decision = await validator.validate(
            UserId(uuid4()), LanguageId(uuid4()), points, PERIOD
        )

        # Assert
        assert decision.accepted is False
        assert decision.reason == RejectionReason.POINTS_OUT_OF_RANGE

    @pytest.mark.asyncio
    async def test_boolean_is_not_a_point_value(self, unit_env):
        """True must not be accepted as one point."""
        # Arrange
        tally = await unit_env.get(TallyService)
        validator = CumulativeBudgetValidator(tally, BudgetCaps())

        # Act
        decision = await validator.validate(
            UserId(uuid4()), LanguageId(uuid4()), True, PERIOD
        )

        # Assert
        assert decision.reason == RejectionReason.POINTS_OUT_OF_RANGE

    @pytest.mark.asyncio
    async def test_top_up_to_exact_language_cap_is_accepted(self, unit_env):
        """3 + 2 reaches the per-language cap exactly."""
        # Arrange
        repo = await unit_env.get(AllocationRepository)
        tally = await unit_env.get(TallyService)
        validator = CumulativeBudgetValidator(tally, BudgetCaps())
        user_id, language_id = UserId(uuid4()), LanguageId(uuid4())
        await spend(repo, user_id, language_id, 3)

        # Act
        decision = await validator.validate(user_id, language_id, 2, PERIOD)

        # Assert
        assert decision.accepted is True

    @pytest.mark.asyncio
    async def test_top_up_past_language_cap_reports_headroom(self, unit_env):
        """3 + 3 overshoots the per-language cap by one."""
        # Arrange
        repo = await unit_env.get(AllocationRepository)
        tally = await unit_env.get(TallyService)
        validator = CumulativeBudgetValidator(tally, BudgetCaps())
        user_id, language_id = UserId(uuid4()), LanguageId(uuid4())
        await spend(repo, user_id, language_id, 3)

        # Act
        decision = await validator.validate(user_id, language_id, 3, PERIOD)

        # Assert
        assert decision.accepted is False
        assert decision.reason == RejectionReason.LANGUAGE_CAP_EXCEEDED
        assert decision.used == 3
        assert decision.cap == 5
        assert decision.headroom == 2
        assert "you can add 2 more" in decision.message

    @pytest.mark.asyncio
    async def test_monthly_cap_is_checked_after_language_cap(self, unit_env):
        """8 spent, 2 more fits, then 1 more is refused with headroom 0."""
        # Arrange
        repo = await unit_env.get(AllocationRepository)
        tally = await unit_env.get(TallyService)
        validator = CumulativeBudgetValidator(tally, BudgetCaps())
        user_id = UserId(uuid4())
        await spend(repo, user_id, LanguageId(uuid4()), 5)
        await spend(repo, user_id, LanguageId(uuid4()), 3)
        target = LanguageId(uuid4())

        # Act
        fits = await validator.validate(user_id, target, 2, PERIOD)
        await spend(repo, user_id, target, 2)
        overflow = await validator.validate(user_id, LanguageId(uuid4()), 1, PERIOD)

        # Assert
        assert fits.accepted is True
        assert overflow.reason == RejectionReason.MONTHLY_CAP_EXCEEDED
        assert overflow.used == 10
        assert overflow.headroom == 0

    @pytest.mark.asyncio
    async def test_previous_month_does_not_count(self, unit_env):
        """Caps reset with the period."""
        # Arrange
        repo = await unit_env.get(AllocationRepository)
        tally = await unit_env.get(TallyService)
        validator = CumulativeBudgetValidator(tally, BudgetCaps())
        user_id, language_id = UserId(uuid4()), LanguageId(uuid4())
        await spend(repo, user_id, language_id, 5, period=Period("2025-02"))

        # Act
        decision = await validator.validate(user_id, language_id, 5, PERIOD)

        # Assert
        assert decision.accepted is True


class TestSlotBudgetValidator:
    """Tests for the fixed 5/3/2 slot rules."""

    @pytest.mark.asyncio
    async def test_non_slot_value_is_rejected(self, unit_env):
        """4 is in range but is not a slot."""
        # Arrange
        tally = await unit_env.get(TallyService)
        validator = SlotBudgetValidator(tally, BudgetCaps())

        # Act
        decision = await validator.validate(
            UserId(uuid4()), LanguageId(uuid4()), 4, PERIOD
        )

        # Assert
        assert decision.reason == RejectionReason.INVALID_SLOT

    @pytest.mark.asyncio
    async def test_second_vote_on_same_language_is_rejected(self, unit_env):
        """Slot rules allow one vote per language per month."""
        # Arrange
        repo = await unit_env.get(AllocationRepository)
        tally = await unit_env.get(TallyService)
        validator = SlotBudgetValidator(tally, BudgetCaps())
        user_id, language_id = UserId(uuid4()), LanguageId(uuid4())
        await spend(repo, user_id, language_id, 2)

        # Act
        decision = await validator.validate(user_id, language_id, 3, PERIOD)

        # Assert
        assert decision.reason == RejectionReason.ALREADY_ALLOCATED
        assert decision.used == 2
        assert decision.headroom == 0

    @pytest.mark.asyncio
    async def test_used_slot_is_rejected(self, unit_env):
        """The 5-point slot can be spent once per month."""
        # Arrange
        repo = await unit_env.get(AllocationRepository)
        tally = await unit_env.get(TallyService)
        validator = SlotBudgetValidator(tally, BudgetCaps())
        user_id = UserId(uuid4())
        await spend(repo, user_id, LanguageId(uuid4()), 5)

        # Act
        decision = await validator.validate(user_id, LanguageId(uuid4()), 5, PERIOD)

        # Assert
        assert decision.reason == RejectionReason.SLOT_TAKEN
        assert "5-point" in decision.message

    @pytest.mark.asyncio
    async def test_all_three_slots_fill_the_month(self, unit_env):
        """5, 3 and 2 on three languages spend exactly the monthly cap."""
        # Arrange
        repo = await unit_env.get(AllocationRepository)
        tally = await unit_env.get(TallyService)
        validator = SlotBudgetValidator(tally, BudgetCaps())
        user_id = UserId(uuid4())

        # Act
        decisions = []
        for points in (5, 3, 2):
            language_id = LanguageId(uuid4())
            decision = await validator.validate(user_id, language_id, points, PERIOD)
            decisions.append(decision)
            await spend(repo, user_id, language_id, points)

        # Assert
        assert all(d.accepted for d in decisions)
        state = await tally.monthly_state(user_id, PERIOD, BudgetCaps())
        assert state.total_used == 10
        assert state.remaining == 0
