"""JWT token domain service."""

import logfire

from langrank.config import AuthSettings
from langrank.domain.model import User
from langrank.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user: User) -> str:
        """Create a session token for a user.

        Args:
            user: Signed-in user

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=str(user.id)):
            token = create_token(
                str(user.id),
                user.external_id,
                user.display_name,
                user.avatar_url,
                self.auth_settings,
            )
            logfire.info("JWT token created", user_id=str(user.id))
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            return payload

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from a token without raising.

        Routes use this to treat a missing or invalid cookie as anonymous.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except JWTError:
            return None
