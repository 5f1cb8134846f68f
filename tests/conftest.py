"""Test configuration and helpers."""

from datetime import datetime, timezone
from urllib.parse import parse_qs, urlparse
from uuid import uuid4

from langrank.domain.model import Language, User
from langrank.domain.repository import LanguageRepository, UserRepository
from langrank.domain.value import LanguageId, UserId


async def make_user(
    user_repository: UserRepository, login: str = "octocat"
) -> User:
    """Save a user with a unique GitHub identity."""
    now = datetime.now(timezone.utc)
    return await user_repository.save(
        User(
            id=UserId(uuid4()),
            external_id=f"gh-{uuid4().hex[:12]}",
            display_name=login,
            avatar_url=None,
            created_at=now,
            updated_at=now,
        )
    )


async def make_language(
    language_repository: LanguageRepository,
    name: str,
    total_points: int = 0,
    is_featured: bool = True,
) -> Language:
    """Save a catalogue language."""
    return await language_repository.save(
        Language(
            id=LanguageId(uuid4()),
            name=name,
            description=f"{name} programming language",
            color="#000000",
            is_featured=is_featured,
            total_points=total_points,
            created_at=datetime.now(timezone.utc),
        )
    )


def sign_in(client, code: str = "alice"):
    """Run the OAuth round trip through a TestClient using the mock GitHub client.

    The session cookie ends up in the client's cookie jar.
    """
    login = client.get("/auth/login", follow_redirects=False)
    state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]
    return client.get(
        "/auth/callback",
        params={"code": code, "state": state},
        follow_redirects=False,
    )
