"""Unit tests for VoteService."""

import asyncio
import random
from uuid import uuid4

import pytest

from langrank.domain.error import (
    ConcurrencyConflictError,
    NotFoundError,
    TransientStoreError,
)
from langrank.domain.repository import (
    AllocationRepository,
    LanguageRepository,
    UserRepository,
)
from langrank.domain.service import (
    CumulativeBudgetValidator,
    TallyService,
    VoteAccepted,
    VoteRejected,
    VoteService,
)
from langrank.domain.value import BudgetCaps, LanguageId, Period, RejectionReason, UserId
from langrank.persistence.repository.inmemory import InMemoryAllocationRepository
from tests.conftest import make_language, make_user
from tests.di import UncommittableAllocationRepository
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

PERIOD = Period("2025-03")


class FlakyAllocationRepository(InMemoryAllocationRepository):
    """Ledger whose first N appends fail with a conflict."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.attempts = 0

    async def append(self, allocation, caps):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise ConcurrencyConflictError("simulated conflict")
        return await super().append(allocation, caps)


def build_vote_service(
    allocation_repository: AllocationRepository,
    language_repository: LanguageRepository,
    user_repository: UserRepository,
) -> VoteService:
    tally = TallyService(allocation_repository)
    caps = BudgetCaps()
    return VoteService(
        allocation_repository=allocation_repository,
        language_repository=language_repository,
        user_repository=user_repository,
        tally_service=tally,
        budget_validator=CumulativeBudgetValidator(tally, caps),
        caps=caps,
    )


class TestSubmitVote:
    """Tests for submit_vote."""

    @pytest.mark.asyncio
    async def test_accepted_vote_updates_ledger_and_lifetime_total(self, unit_env):
        """An accepted vote appends one row and rewrites the language total."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user = await make_user(await unit_env.get(UserRepository))
        language_repo = await unit_env.get(LanguageRepository)
        rust = await make_language(language_repo, "Rust")

        # Act
        result = await vote_service.submit_vote(user.id, rust.id, 3, PERIOD)

        # Assert
        assert isinstance(result, VoteAccepted)
        assert result.accepted is True
        assert result.points == 3
        assert result.remaining_monthly_points == 7
        assert result.language_points_after == 3
        assert result.language_total_points == 3
        stored = await language_repo.find_by_id(rust.id)
        assert stored.total_points == 3

    @pytest.mark.asyncio
    async def test_month_of_votes_across_three_languages(self, unit_env):
        """Rust 5, Go 3, Python 2 then a top-up on Python is refused."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user = await make_user(await unit_env.get(UserRepository))
        language_repo = await unit_env.get(LanguageRepository)
        rust = await make_language(language_repo, "Rust")
        go = await make_language(language_repo, "Go")
        python = await make_language(language_repo, "Python")

        # Act
        first = await vote_service.submit_vote(user.id, rust.id, 5, PERIOD)
        second = await vote_service.submit_vote(user.id, go.id, 3, PERIOD)
        third = await vote_service.submit_vote(user.id, python.id, 2, PERIOD)
        fourth = await vote_service.submit_vote(user.id, python.id, 1, PERIOD)

        # Assert
        assert [first.remaining_monthly_points, second.remaining_monthly_points] == [5, 2]
        assert third.remaining_monthly_points == 0
        assert isinstance(fourth, VoteRejected)
        assert fourth.reason == RejectionReason.MONTHLY_CAP_EXCEEDED
        assert fourth.headroom == 0

    @pytest.mark.asyncio
    async def test_rejected_vote_writes_nothing(self, unit_env):
        """A refusal leaves the ledger and the lifetime total untouched."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        allocation_repo = await unit_env.get(AllocationRepository)
        user = await make_user(await unit_env.get(UserRepository))
        language_repo = await unit_env.get(LanguageRepository)
        go = await make_language(language_repo, "Go")

        # Act
        result = await vote_service.submit_vote(user.id, go.id, 6, PERIOD)

        # Assert
        assert isinstance(result, VoteRejected)
        assert result.reason == RejectionReason.POINTS_OUT_OF_RANGE
        assert await allocation_repo.count() == 0
        assert (await language_repo.find_by_id(go.id)).total_points == 0

    @pytest.mark.asyncio
    async def test_unknown_language_raises_not_found(self, unit_env):
        """Voting on a language outside the catalogue is an error, not a rejection."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user = await make_user(await unit_env.get(UserRepository))

        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.submit_vote(user.id, LanguageId(uuid4()), 1, PERIOD)
        assert exc_info.value.resource == "Language"

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, unit_env):
        """A token for a deleted user cannot vote."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        language = await make_language(await unit_env.get(LanguageRepository), "Zig")

        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.submit_vote(UserId(uuid4()), language.id, 1, PERIOD)
        assert exc_info.value.resource == "User"

    @pytest.mark.asyncio
    async def test_concurrent_votes_never_overshoot_caps(self, unit_env):
        """Parallel submissions from one user stay within the monthly cap."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        tally = await unit_env.get(TallyService)
        user = await make_user(await unit_env.get(UserRepository))
        language_repo = await unit_env.get(LanguageRepository)
        languages = [
            await make_language(language_repo, f"Lang{i}") for i in range(6)
        ]

        # Act
        results = await asyncio.gather(
            *(
                vote_service.submit_vote(user.id, language.id, 3, PERIOD)
                for language in languages
            )
        )

        # Assert
        accepted = [r for r in results if isinstance(r, VoteAccepted)]
        assert len(accepted) == 3
        state = await tally.monthly_state(user.id, PERIOD, BudgetCaps())
        assert state.total_used == 9
        assert state.remaining == 1

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried_once(self, unit_env):
        """One conflict is absorbed by the retry."""
        # Arrange
        allocation_repo = FlakyAllocationRepository(failures=1)
        language_repo = await unit_env.get(LanguageRepository)
        user_repo = await unit_env.get(UserRepository)
        vote_service = build_vote_service(allocation_repo, language_repo, user_repo)
        user = await make_user(user_repo)
        language = await make_language(language_repo, "Elixir")

        # Act
        result = await vote_service.submit_vote(user.id, language.id, 2, PERIOD)

        # Assert
        assert isinstance(result, VoteAccepted)
        assert allocation_repo.attempts == 2
        assert await allocation_repo.count() == 1

    @pytest.mark.asyncio
    async def test_repeated_failure_raises_transient_error(self, unit_env):
        """A second conflict surfaces as a retryable error with nothing stored."""
        # Arrange
        allocation_repo = FlakyAllocationRepository(failures=2)
        language_repo = await unit_env.get(LanguageRepository)
        user_repo = await unit_env.get(UserRepository)
        vote_service = build_vote_service(allocation_repo, language_repo, user_repo)
        user = await make_user(user_repo)
        language = await make_language(language_repo, "Haskell")

        # Act & Assert
        with pytest.raises(TransientStoreError, match="Please try again"):
            await vote_service.submit_vote(user.id, language.id, 2, PERIOD)
        assert await allocation_repo.count() == 0
        assert (await language_repo.find_by_id(language.id)).total_points == 0

    @pytest.mark.asyncio
    async def test_commit_failure_is_never_reported_as_accepted(self, unit_env):
        """A failing commit is retried, then raised instead of returning success."""
        # Arrange
        allocation_repo = UncommittableAllocationRepository()
        language_repo = await unit_env.get(LanguageRepository)
        user_repo = await unit_env.get(UserRepository)
        vote_service = build_vote_service(allocation_repo, language_repo, user_repo)
        user = await make_user(user_repo)
        language = await make_language(language_repo, "Zig")

        # Act & Assert
        with pytest.raises(TransientStoreError, match="Please try again"):
            await vote_service.submit_vote(user.id, language.id, 3, PERIOD)
        assert allocation_repo.commits == VoteService.MAX_ATTEMPTS
        assert await allocation_repo.count() == 0


class TestCapInvariants:
    """Caps hold for any sequence of requests."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [1, 7, 42, 2025])
    async def test_random_sequences_respect_caps(self, unit_env, seed):
        """No user exceeds 10 per month or 5 per language, and totals match the ledger."""
        # Arrange
        rng = random.Random(seed)
        vote_service = await unit_env.get(VoteService)
        allocation_repo = await unit_env.get(AllocationRepository)
        language_repo = await unit_env.get(LanguageRepository)
        user_repo = await unit_env.get(UserRepository)
        users = [await make_user(user_repo, f"user{i}") for i in range(3)]
        languages = [await make_language(language_repo, f"L{i}") for i in range(4)]
        periods = [Period("2025-01"), Period("2025-02")]

        # Act
        for _ in range(60):
            await vote_service.submit_vote(
                rng.choice(users).id,
                rng.choice(languages).id,
                rng.randint(-1, 7),
                rng.choice(periods),
            )

        # Assert
        for user in users:
            for period in periods:
                monthly = await allocation_repo.monthly_points_for_user(user.id, period)
                assert monthly.total_points <= 10
                for language in languages:
                    assert (
                        await allocation_repo.monthly_points_for_user_language(
                            user.id, language.id, period
                        )
                        <= 5
                    )
        for language in languages:
            stored = await language_repo.find_by_id(language.id)
            assert stored.total_points == (
                await allocation_repo.lifetime_total_for_language(language.id)
            )
