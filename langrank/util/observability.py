"""Logfire setup and library instrumentation.

Domain code logs through logfire directly:

    logfire.info("Vote recorded", user_id=str(user_id), points=points)

    with logfire.span("vote_service.submit_vote", user_id=str(user_id)):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from langrank.config import Settings

# Polled by the load balancer; tracing it only adds noise
UNTRACED_URLS = "/health"


def _sends_to_cloud(settings: Settings) -> bool:
    """Explicit OBSERVABILITY__SEND_TO_LOGFIRE wins, otherwise a token implies yes."""
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before anything is instrumented.

    Args:
        settings: Application settings
    """
    send_to_logfire = _sends_to_cloud(settings)

    logfire.configure(
        service_name="langrank-api",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        voting_strategy=settings.voting.strategy,
    )


def _request_attributes(request, attributes):
    # Cookies carry the session JWT, so headers are never captured
    mapped = {**attributes, "path": request.url.path}
    if getattr(request, "method", None):
        mapped["method"] = request.method
    if request.client:
        mapped["client_host"] = request.client.host
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health checks."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls=UNTRACED_URLS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL issued through the async engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace the outbound GitHub OAuth calls."""
    logfire.instrument_httpx()
