"""Login use case."""

import logfire
from pydantic import BaseModel

from langrank.domain.service import AuthService, JWTService, UserService


class LoginRequest(BaseModel):
    """Login request from the GitHub OAuth callback."""

    code: str  # OAuth authorization code
    state: str  # State parameter echoed by GitHub


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user_id: str
    display_name: str


class LoginUseCase:
    """Use case for signing in with GitHub."""

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Steps:
        1. Exchange the code for the GitHub identity
        2. Create the user, or refresh its display fields
        3. Issue a session token

        Args:
            request: Login request with OAuth callback parameters

        Returns:
            Login response with JWT token and user info

        Raises:
            GitHubOAuthError: If the code exchange fails
        """
        identity = await self.auth_service.authenticate(request.code)

        with logfire.span("login_user", external_id=identity.external_id):
            user = await self.user_service.upsert_from_identity(identity)
            token = self.jwt_service.create_token(user)

            logfire.info(
                "User logged in",
                user_id=str(user.id),
                display_name=user.display_name,
            )

            return LoginResponse(
                token=token,
                user_id=str(user.id),
                display_name=user.display_name,
            )
