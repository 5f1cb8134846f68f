"""HTTP mapping for errors raised below the interface layer.

Budget rejections never reach these handlers: the vote route turns a
rejected result into a 400 response itself.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from langrank.adapter.error import ProviderError
from langrank.domain.error import (
    NotFoundError,
    TransientStoreError,
    UnauthenticatedError,
)
from langrank.util.error import ConfigurationError
from langrank.util.jwt import JWTError

logger = logging.getLogger(__name__)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "resource": exc.resource},
    )


async def handle_unauthenticated(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc) or "Authentication required"},
    )


async def handle_transient(request: Request, exc: TransientStoreError) -> JSONResponse:
    logger.warning(f"Transient store failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "retryable": True},
    )


async def handle_provider(request: Request, exc: ProviderError) -> JSONResponse:
    logger.error(f"Provider failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


async def handle_configuration(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on an app.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(UnauthenticatedError, handle_unauthenticated)
    app.add_exception_handler(JWTError, handle_unauthenticated)
    app.add_exception_handler(TransientStoreError, handle_transient)
    app.add_exception_handler(ProviderError, handle_provider)
    app.add_exception_handler(ConfigurationError, handle_configuration)
