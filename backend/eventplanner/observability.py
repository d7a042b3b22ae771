"""Logfire cloud observability initialization and instrumentation."""

import logging

import logfire

from eventplanner import __version__
from eventplanner.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings, app=None) -> None:
    """
    Initialize Logfire with instrumentation.

    Must be called ONCE at application startup, before any pipeline run.

    This function configures Logfire cloud tracking and instruments:
    - PydanticAI agents (extraction, drafting)
    - HTTPX clients (LLM providers)
    - FastAPI, when an app is passed
    - Python logging (bridges to Logfire)

    Args:
        settings: Application settings containing Logfire token
        app: Optional FastAPI application to instrument
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="eventplanner",
            service_version=__version__,
            environment=settings.environment,
        )

        logfire.instrument_pydantic_ai()
        logfire.instrument_httpx()
        if app is not None:
            logfire.instrument_fastapi(app)

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("✓ Logfire cloud tracking initialized")

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
        # Continue running - observability is optional
