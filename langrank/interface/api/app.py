"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from langrank.config import Settings
from langrank.interface.api.routes import (
    admin,
    auth,
    health,
    languages,
    ranking,
    votes,
)
from langrank.interface.error import register_error_handlers
from langrank.util.di.container import create_container, setup_di
from langrank.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this with no container;
    scripts/start_app.py does that. Tests pass their own container, which
    skips instrumentation and the production providers.

    Args:
        container: DI container to use instead of the production one
    """
    settings = Settings()

    if container is None:
        # Logfire must be configured before instrumentation
        instrument_httpx()

    app_instance = FastAPI(
        title="Language Ranking API",
        description="Monthly point-budget voting on programming languages",
        version="0.1.0",
    )

    if container is None:
        instrument_fastapi(app_instance)
        container = create_container()

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container)
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(languages.router)
    app_instance.include_router(ranking.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(admin.router)

    return app_instance
