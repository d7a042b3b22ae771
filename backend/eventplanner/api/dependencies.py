"""FastAPI dependencies."""

from fastapi import HTTPException, Request

from eventplanner.pipeline import EventPlanner


def get_planner(request: Request) -> EventPlanner:
    """Return the planner built by the application lifespan."""
    planner = getattr(request.app.state, "planner", None)
    if planner is None:
        raise HTTPException(status_code=503, detail="Planner is not initialized")
    return planner
