"""API routes module."""

from eventplanner.api.routes.operations import router as operations_router
from eventplanner.api.routes.planning import router as planning_router

__all__ = ["operations_router", "planning_router"]
