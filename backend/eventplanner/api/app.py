"""
FastAPI application factory for the event planner.

The application:
- Builds the planner and its capabilities in the lifespan
- Configures CORS for frontend integration
- Sets up Logfire observability
- Mounts the planning and operations routers
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventplanner import __version__
from eventplanner.api.routes import operations_router, planning_router
from eventplanner.config import Settings, get_settings
from eventplanner.observability import initialize_logfire
from eventplanner.pipeline import EventPlanner, build_capabilities

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, planner: EventPlanner | None = None) -> FastAPI:
    """
    Create the API application.

    Args:
        settings: Settings to use; defaults to ``get_settings()``
        planner: Pre-built planner. When omitted the lifespan builds one
            from the configured capabilities.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.planner is None
        if owned:
            app.state.planner = EventPlanner(settings, build_capabilities(settings))
        app.state.planner.start()
        logger.info(f"Event planner API started (environment={settings.environment})")

        yield

        logger.info("Shutting down event planner API")
        app.state.planner.close()
        if owned:
            app.state.planner = None

    app = FastAPI(
        title="Event Planner API",
        description="Corporate event plans from free-text requests",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.planner = planner

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    initialize_logfire(settings, app)

    app.include_router(planning_router)
    app.include_router(operations_router)

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        return {
            "name": "Event Planner API",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/health",
        }

    return app
