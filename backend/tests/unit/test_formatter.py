"""
Unit Tests: Result formatting

Test cases:
- Quality sub-scores stay within 0-25
- Success requires a completed run with no errors
- Cached copies drop per-run metadata
"""

from datetime import datetime, timezone

from eventplanner.pipeline.formatter import (
    data_completeness_score,
    execution_efficiency_score,
    format_result,
    minimal_failure,
    plan_richness_score,
    strip_run_metadata,
    venue_relevance_score,
)
from eventplanner.pipeline.plan_template import COST_HEADER, ITINERARY_HEADER
from eventplanner.pipeline.stages import summarize_errors
from eventplanner.pipeline.state import (
    PipelineState,
    PlanMeta,
    Stage,
    ValidationMeta,
    Venue,
)
from tests.fakes import BANGALORE_EVENT, BANGALORE_REQUEST, SAMPLE_PLAN

NOW = datetime(2026, 1, 15, tzinfo=timezone.utc)


def _venue(score: float) -> Venue:
    return Venue(name="Hall", url="https://example.com", description="d", suitability_score=score)


def _completed_state(**changes) -> PipelineState:
    state = PipelineState.initial(BANGALORE_REQUEST).evolve(
        event_data=BANGALORE_EVENT,
        validation_meta=ValidationMeta(validated_at=NOW),
        draft_plan=SAMPLE_PLAN,
        plan_meta=PlanMeta(generated_at=NOW),
        venues=(_venue(80),),
        succeeded=True,
        next_stage=Stage.DONE,
    )
    return state.evolve(**changes)


def test_data_completeness_score():
    assert data_completeness_score(None) == 0
    assert data_completeness_score(BANGALORE_EVENT) == 25
    assert data_completeness_score(BANGALORE_EVENT.evolve(location="")) == 20


def test_plan_richness_score():
    assert plan_richness_score(None) == 0
    assert plan_richness_score("short plan") == 5
    assert plan_richness_score(SAMPLE_PLAN) == 15
    long_plan = SAMPLE_PLAN + "x" * 2500
    assert plan_richness_score(long_plan) == 25
    assert ITINERARY_HEADER in long_plan and COST_HEADER in long_plan


def test_venue_relevance_score():
    assert venue_relevance_score(None) == 0
    assert venue_relevance_score(()) == 0
    assert venue_relevance_score((_venue(100), _venue(100))) == 25
    assert venue_relevance_score((_venue(70), _venue(50))) == 15


def test_execution_efficiency_score():
    assert execution_efficiency_score(_completed_state()) == 25
    fallback = _completed_state(plan_meta=PlanMeta(generated_at=NOW, is_fallback=True))
    assert execution_efficiency_score(fallback) == 20
    partial = PipelineState.initial(BANGALORE_REQUEST)
    assert execution_efficiency_score(partial) == 20


def test_format_successful_run():
    result = format_result(
        _completed_state(),
        elapsed_seconds=1.23456,
        request_id="abc",
        execution_path=["parse", "validate", "plan", "venue_search"],
    )

    assert result.success
    assert result.elapsed_seconds == 1.235
    assert result.error is None
    assert result.error_details is None
    assert result.analytics.progress_percentage == 100
    assert result.analytics.stages_completed == ["parse", "validate", "plan", "venue_search"]
    assert result.analytics.request_id == "abc"
    assert not result.is_refinement
    assert result.original_text is None


def test_format_failed_run():
    errors = ("Invalid input: must be at least 10 characters long",)
    state = PipelineState.initial("hi!!!").evolve(
        errors=errors, error_details=summarize_errors(errors), next_stage=Stage.DONE
    )

    result = format_result(state)

    assert not result.success
    assert result.errors == list(errors)
    assert result.error.startswith("Please check your input")
    assert result.analytics.progress_percentage == 0
    assert result.quality_indicators.data_completeness == 0


def test_errors_mean_failure_even_if_succeeded():
    state = _completed_state(errors=("Internal system fault: late error",))
    assert not format_result(state).success


def test_refinement_fields():
    state = _completed_state(
        user_input=PipelineState.initial(BANGALORE_REQUEST, "make it outdoor").user_input
    )
    result = format_result(state)

    assert result.is_refinement
    assert result.refinement_text == "make it outdoor"
    assert result.original_text == BANGALORE_REQUEST


def test_minimal_failure():
    result = minimal_failure("System error occurred. Please try again.", 0.5, "req")

    assert not result.success
    assert result.errors == ["System error occurred. Please try again."]
    assert result.analytics.request_id == "req"


def test_strip_run_metadata():
    result = format_result(
        _completed_state(), elapsed_seconds=2.0, request_id="abc", stage_timings_ms={"parse": 1.0}
    )

    stripped = strip_run_metadata(result)

    assert stripped.elapsed_seconds is None
    assert stripped.timestamp is None
    assert stripped.analytics.request_id is None
    assert stripped.analytics.stage_timings_ms == {}
    assert stripped.draft_plan == result.draft_plan
