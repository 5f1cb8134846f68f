"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from langrank.domain.error import NotFoundError
from langrank.domain.service import UserService
from langrank.domain.value import ExternalIdentity, UserId
from langrank.persistence.repository.inmemory import InMemoryUserRepository


class TestUpsertFromIdentity:
    """Tests for UserService.upsert_from_identity()."""

    @pytest.mark.asyncio
    async def test_new_identity_creates_user(self):
        # Arrange
        service = UserService(InMemoryUserRepository())
        identity = ExternalIdentity(external_id="1", display_name="octocat")

        # Act
        user = await service.upsert_from_identity(identity)

        # Assert
        assert user.external_id == "1"
        assert user.display_name == "octocat"
        assert await service.count() == 1

    @pytest.mark.asyncio
    async def test_renamed_account_keeps_id_and_updates_fields(self):
        """The GitHub account ID is stable; the login is not."""
        # Arrange
        service = UserService(InMemoryUserRepository())
        original = await service.upsert_from_identity(
            ExternalIdentity(external_id="42", display_name="old-login")
        )

        # Act
        renamed = await service.upsert_from_identity(
            ExternalIdentity(
                external_id="42",
                display_name="new-login",
                avatar_url="https://avatars.example.com/42",
            )
        )

        # Assert
        assert renamed.id == original.id
        assert renamed.display_name == "new-login"
        assert renamed.avatar_url == "https://avatars.example.com/42"
        assert renamed.created_at == original.created_at
        assert await service.count() == 1


class TestGetById:
    """Tests for UserService.get_by_id()."""

    @pytest.mark.asyncio
    async def test_missing_user_raises_not_found(self):
        service = UserService(InMemoryUserRepository())

        with pytest.raises(NotFoundError):
            await service.get_by_id(UserId(uuid4()))
