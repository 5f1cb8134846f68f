"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from langrank.adapter.error import ProviderError
from langrank.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from langrank.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from langrank.application.usecase.auth.login import LoginRequest
from langrank.config import Settings
from langrank.domain.error import NotFoundError
from langrank.domain.service import AuthService
from langrank.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

# Short-lived cookie binding the OAuth state to the browser that started login
STATE_COOKIE = "oauth_state"
STATE_MAX_AGE = 10 * 60


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Response for /auth/me.

    Reports the unauthenticated state instead of raising an error.
    """

    authenticated: bool
    user: GetCurrentUserResponse | None = None


@router.get("/login")
async def login(
    auth_service: FromDishka[AuthService],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Redirect the browser to GitHub's authorization page."""
    state = secrets.token_urlsafe(32)
    auth_url = await auth_service.initiate_login(state)

    response = RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        key=STATE_COOKIE,
        value=state,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
        max_age=STATE_MAX_AGE,
    )
    return response


@router.get("/callback")
async def callback(
    request: Request,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Handle the GitHub OAuth callback and complete login.

    On success the session JWT is set as an httpOnly cookie and the browser
    goes to the frontend. Any failure, including a denied authorization
    that arrives with ?error= and no code, sends it to the frontend with
    ?error=auth_failed.

    Example:
        GET /auth/callback?code=abc123&state=xyz789

        Redirects to: http://localhost:3000
        Sets cookie: auth_token
    """
    failure = RedirectResponse(
        url=f"{settings.api.frontend_url}/?error=auth_failed",
        status_code=status.HTTP_302_FOUND,
    )
    failure.delete_cookie(STATE_COOKIE, path="/")

    if error or not code or not state:
        logger.warning(f"OAuth callback without a code: {error or 'no code'}")
        return failure

    expected_state = request.cookies.get(STATE_COOKIE)
    if not expected_state or not secrets.compare_digest(
        expected_state.encode(), state.encode()
    ):
        logger.warning("OAuth callback with missing or mismatched state")
        return failure

    try:
        login_response = await login_use_case.execute(
            LoginRequest(code=code, state=state)
        )
    except ProviderError as e:
        logger.error(f"GitHub OAuth error during callback: {e}")
        return failure

    logger.info(f"Login successful for user: {login_response.display_name}")

    redirect_response = RedirectResponse(
        url=settings.api.frontend_url,
        status_code=status.HTTP_302_FOUND,
    )
    redirect_response.set_cookie(
        key=settings.auth.cookie_name,
        value=login_response.token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )
    redirect_response.delete_cookie(STATE_COOKIE, path="/")

    return redirect_response


@router.post("/logout", response_model=LogoutResponse)
async def logout(settings: FromDishka[Settings]):
    """Clear the session cookie."""
    response = JSONResponse(
        content=LogoutResponse(success=True, message="Logged out").model_dump()
    )
    response.delete_cookie(
        key=settings.auth.cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
) -> AuthStatusResponse:
    """Return the signed-in user, or authenticated=false."""
    token = request.cookies.get(settings.auth.cookie_name)
    if not token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=token)
        )
    except (JWTError, NotFoundError):
        return AuthStatusResponse(authenticated=False)

    return AuthStatusResponse(authenticated=True, user=user)
