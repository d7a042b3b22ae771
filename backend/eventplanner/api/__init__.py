"""HTTP API for the event planner."""

from .app import create_app

__all__ = ["create_app"]
