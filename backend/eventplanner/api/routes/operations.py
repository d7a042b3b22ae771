"""Health and cache management routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from eventplanner.api.dependencies import get_planner
from eventplanner.pipeline import EventPlanner, HealthStatus

router = APIRouter(prefix="/api", tags=["Operations"])


@router.get("/health", response_model=HealthStatus)
async def health_check(planner: EventPlanner = Depends(get_planner)):
    """Run a canned request through the pipeline; 503 when it fails."""
    health = await planner.health_check()
    return JSONResponse(
        status_code=200 if health.status == "healthy" else 503,
        content=health.model_dump(mode="json"),
    )


@router.get("/cache/stats")
async def cache_stats(planner: EventPlanner = Depends(get_planner)):
    return {
        "success": True,
        "cache": planner.cache_stats().model_dump(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/cache/clear")
async def clear_cache(planner: EventPlanner = Depends(get_planner)):
    removed = planner.clear_cache()
    return {
        "success": True,
        "removed": removed,
        "message": "Cache cleared successfully",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
