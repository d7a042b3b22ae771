"""Result envelope and quality indicators derived from a terminal state."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from eventplanner.pipeline.plan_template import COST_HEADER, ITINERARY_HEADER
from eventplanner.pipeline.state import (
    FORWARD_STAGES,
    ErrorDetails,
    EventData,
    PipelineState,
    PlanMeta,
    Venue,
    VenueMeta,
)

MAX_SUB_SCORE = 25


# =============================================================================
# Pydantic Models
# =============================================================================


class QualityIndicators(BaseModel):
    """Four independent 0-25 scores. Callers combine them as they see fit."""

    data_completeness: int = Field(ge=0, le=MAX_SUB_SCORE)
    plan_richness: int = Field(ge=0, le=MAX_SUB_SCORE)
    venue_relevance: int = Field(ge=0, le=MAX_SUB_SCORE)
    execution_efficiency: int = Field(ge=0, le=MAX_SUB_SCORE)


class ExecutionAnalytics(BaseModel):
    request_id: str | None = None
    execution_path: list[str] = Field(default_factory=list)
    stage_timings_ms: dict[str, float] = Field(default_factory=dict)
    stages_completed: list[str] = Field(default_factory=list)
    progress_percentage: int = 0
    used_fallbacks: bool = False


class FormattedResult(BaseModel):
    """The envelope returned to callers for every run."""

    model_config = {"frozen": True}

    success: bool
    cached: bool = False
    elapsed_seconds: float | None = None
    timestamp: datetime | None = None
    event_data: EventData | None = None
    draft_plan: str | None = None
    plan_meta: PlanMeta | None = None
    venues: list[Venue] = Field(default_factory=list)
    venue_meta: VenueMeta | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
    error_details: ErrorDetails | None = None
    quality_indicators: QualityIndicators
    analytics: ExecutionAnalytics = Field(default_factory=ExecutionAnalytics)
    is_refinement: bool = False
    refinement_text: str | None = None
    original_text: str | None = None


# =============================================================================
# Quality scores
# =============================================================================


def data_completeness_score(event: EventData | None) -> int:
    """5 points for each populated required field."""
    if event is None:
        return 0
    fields = [
        event.event_type,
        event.attendee_count,
        event.location,
        event.date,
        event.budget,
    ]
    return min(MAX_SUB_SCORE, 5 * sum(1 for value in fields if value))


def plan_richness_score(plan: str | None) -> int:
    if not plan:
        return 0
    if len(plan) > 2000:
        score = 15
    elif len(plan) > 1000:
        score = 10
    else:
        score = 5
    if ITINERARY_HEADER in plan and COST_HEADER in plan:
        score += 10
    return min(MAX_SUB_SCORE, score)


def venue_relevance_score(venues: tuple[Venue, ...] | None) -> int:
    """Average suitability (0-100) scaled to 0-25."""
    if not venues:
        return 0
    average = sum(v.suitability_score or 0 for v in venues) / len(venues)
    return min(MAX_SUB_SCORE, round(average / 4))


def execution_efficiency_score(state: PipelineState) -> int:
    score = 15
    if not state.used_fallback():
        score += 5
    if len(state.completed_stages()) == len(FORWARD_STAGES):
        score += 5
    return score


def quality_indicators(state: PipelineState) -> QualityIndicators:
    return QualityIndicators(
        data_completeness=data_completeness_score(state.event_data),
        plan_richness=plan_richness_score(state.draft_plan),
        venue_relevance=venue_relevance_score(state.venues),
        execution_efficiency=execution_efficiency_score(state),
    )


# =============================================================================
# Envelope
# =============================================================================


def format_result(
    state: PipelineState,
    elapsed_seconds: float | None = None,
    request_id: str | None = None,
    execution_path: list[str] | None = None,
    stage_timings_ms: dict[str, float] | None = None,
) -> FormattedResult:
    """Map a terminal state onto the external envelope."""
    completed = state.completed_stages()
    user_input = state.user_input
    error_details = state.error_details
    success = state.succeeded and not state.errors

    return FormattedResult(
        success=success,
        elapsed_seconds=round(elapsed_seconds, 3) if elapsed_seconds is not None else None,
        timestamp=datetime.now(timezone.utc),
        event_data=state.event_data,
        draft_plan=state.draft_plan,
        plan_meta=state.plan_meta,
        venues=list(state.venues or ()),
        venue_meta=state.venue_meta,
        errors=list(state.errors),
        warnings=list(state.warnings),
        error=error_details.message if error_details and not success else None,
        error_details=error_details if not success else None,
        quality_indicators=quality_indicators(state),
        analytics=ExecutionAnalytics(
            request_id=request_id,
            execution_path=execution_path or [],
            stage_timings_ms=stage_timings_ms or {},
            stages_completed=[str(stage) for stage in completed],
            progress_percentage=round(len(completed) / len(FORWARD_STAGES) * 100),
            used_fallbacks=state.used_fallback(),
        ),
        is_refinement=user_input.is_refinement,
        refinement_text=user_input.refinement_text,
        original_text=user_input.raw_text if user_input.is_refinement else None,
    )


def minimal_failure(
    message: str,
    elapsed_seconds: float | None = None,
    request_id: str | None = None,
) -> FormattedResult:
    """Bare failure envelope for when formatting a real state is not possible."""
    return FormattedResult(
        success=False,
        elapsed_seconds=round(elapsed_seconds, 3) if elapsed_seconds is not None else None,
        timestamp=datetime.now(timezone.utc),
        errors=[message],
        error=message,
        error_details=ErrorDetails(message=message),
        quality_indicators=QualityIndicators(
            data_completeness=0, plan_richness=0, venue_relevance=0, execution_efficiency=0
        ),
        analytics=ExecutionAnalytics(request_id=request_id),
    )


def strip_run_metadata(result: FormattedResult) -> FormattedResult:
    """Drop per-run timing and ids before caching.

    The copy is deep so callers holding ``result`` cannot reach the cached lists.
    """
    return result.model_copy(
        deep=True,
        update={
            "elapsed_seconds": None,
            "timestamp": None,
            "cached": False,
            "analytics": result.analytics.model_copy(
                deep=True,
                update={"request_id": None, "stage_timings_ms": {}},
            ),
        }
    )
