"""Event planning API routes."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from eventplanner.api.dependencies import get_planner
from eventplanner.pipeline import EventPlanner, FormattedResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Planning"])


class GenerateRequest(BaseModel):
    text: str = ""
    refinement_text: str | None = None


class RefineRequest(BaseModel):
    original_text: str = ""
    refinement_text: str = ""


def _respond(result: FormattedResult) -> JSONResponse:
    return JSONResponse(
        status_code=200 if result.success else 400,
        content=result.model_dump(mode="json"),
    )


@router.post("/generate-event-plan", response_model=FormattedResult)
async def generate_event_plan(
    request: GenerateRequest,
    planner: EventPlanner = Depends(get_planner),
):
    """Generate an event plan from a free-text description."""
    logger.info(f"Plan request: {request.text[:100]!r}")
    result = await planner.run(request.text, request.refinement_text)
    logger.info(f"Plan response in {result.elapsed_seconds}s - success={result.success}")
    return _respond(result)


@router.post("/refine-plan", response_model=FormattedResult)
async def refine_plan(
    request: RefineRequest,
    planner: EventPlanner = Depends(get_planner),
):
    """Re-plan an earlier request with additional requirements."""
    logger.info(f"Refinement request: {request.refinement_text[:100]!r}")
    result = await planner.refine(request.original_text, request.refinement_text)
    return _respond(result)


@router.get("/examples")
async def get_examples():
    """Example inputs for generation and refinement."""
    return EventPlanner.examples()
