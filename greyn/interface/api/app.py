"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from greyn.config import Settings
from greyn.domain.service import NotificationDispatcher
from greyn.interface.api.errors import register_error_handlers
from greyn.interface.api.routes import health, invitations, users
from greyn.util.di.container import create_container, setup_di
from greyn.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Let queued invitation emails finish before the container closes."""
    yield
    container: AsyncContainer = app.state.dishka_container
    dispatcher = await container.get(NotificationDispatcher)
    if dispatcher.in_flight:
        logfire.info("Draining invitation emails", count=dispatcher.in_flight)
    await dispatcher.drain()
    await container.close()


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Settings, loaded from the environment when omitted
        container: DI container, the production container when omitted
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="Greyn Identity API",
        description="Identity and invitation management for the Greyn ESG platform",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "X-Admin-Id"],
        expose_headers=["Content-Disposition"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(invitations.admin_router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(users.router)

    return app_instance
