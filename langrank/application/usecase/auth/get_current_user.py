"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from langrank.domain.service import JWTService, UserService
from langrank.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    external_id: str
    display_name: str
    avatar_url: str | None
    created_at: datetime


class GetCurrentUserUseCase:
    """Use case for getting current authenticated user."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Resolve the session token to the stored user.

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If user not found
        """
        payload = self.jwt_service.verify_token(request.token)

        user = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))

        return GetCurrentUserResponse(
            user_id=str(user.id),
            external_id=user.external_id,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
        )
