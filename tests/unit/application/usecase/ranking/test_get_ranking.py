"""Unit tests for GetRankingUseCase."""

import pytest
from pydantic import ValidationError

from langrank.application.usecase.ranking import GetRankingRequest, GetRankingUseCase
from langrank.domain.repository import LanguageRepository, UserRepository
from langrank.domain.service import VoteService
from langrank.domain.value import Period
from tests.conftest import make_language, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetRankingUseCase:
    """Tests for GetRankingUseCase."""

    @pytest.mark.asyncio
    async def test_lifetime_ranking_is_flattened(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetRankingUseCase)
        language_repo = await unit_env.get(LanguageRepository)
        swift = await make_language(language_repo, "Swift", total_points=12)
        await make_language(language_repo, "Scala", total_points=3)

        # Act
        response = await use_case.execute(GetRankingRequest())

        # Assert
        assert response.scope == "lifetime"
        top = response.entries[0]
        assert (top.rank, top.name, top.total_points) == (1, "Swift", 12)
        assert top.language_id == str(swift.id)

    @pytest.mark.parametrize("scope", ["all", "2025-13", ""])
    def test_scope_must_be_lifetime_or_month(self, scope):
        with pytest.raises(ValidationError):
            GetRankingRequest(scope=scope)

    @pytest.mark.asyncio
    async def test_lifetime_ranking_has_no_period_stats(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetRankingUseCase)

        # Act
        response = await use_case.execute(GetRankingRequest())

        # Assert
        assert response.period_stats is None

    @pytest.mark.asyncio
    async def test_month_ranking_carries_period_stats(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetRankingUseCase)
        vote_service = await unit_env.get(VoteService)
        language_repo = await unit_env.get(LanguageRepository)
        user_repo = await unit_env.get(UserRepository)
        kotlin = await make_language(language_repo, "Kotlin")
        ada = await make_language(language_repo, "Ada")
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        await vote_service.submit_vote(alice.id, kotlin.id, 4, Period("2025-06"))
        await vote_service.submit_vote(bob.id, kotlin.id, 1, Period("2025-06"))
        await vote_service.submit_vote(bob.id, ada.id, 2, Period("2025-05"))

        # Act
        response = await use_case.execute(GetRankingRequest(scope="2025-06"))

        # Assert
        assert response.scope == "2025-06"
        assert response.entries[0].name == "Kotlin"
        stats = response.period_stats
        assert (stats.total_allocations, stats.total_users, stats.total_points) == (
            2,
            2,
            5,
        )
