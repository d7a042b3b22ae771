"""
Unit Tests: Plan stage

Test cases:
- Drafted plans are stored with metadata
- Refinements enrich the drafting input and add a notice before the itinerary
- Drafting failures and timeouts fall back to the offline template with warnings
"""

import asyncio

from eventplanner.config import LLMConfig
from eventplanner.pipeline.plan_template import (
    ITINERARY_HEADER,
    add_refinement_notice,
    build_fallback_plan,
)
from eventplanner.pipeline.stages import PlanStage
from eventplanner.pipeline.stages.plan import enrich_for_drafting
from eventplanner.pipeline.state import PipelineState, Stage
from tests.fakes import BANGALORE_EVENT, BANGALORE_REQUEST, SAMPLE_PLAN, FakeDrafting


def _run(settings, drafting, refinement_text=None, event=BANGALORE_EVENT):
    state = PipelineState.initial(BANGALORE_REQUEST, refinement_text).evolve(
        event_data=event, next_stage=Stage.PLAN
    )
    return asyncio.run(PlanStage(drafting, settings).run(state))


def test_plan_success(settings):
    drafting = FakeDrafting()
    state = _run(settings, drafting)

    assert state.next_stage is Stage.VENUE_SEARCH
    assert state.draft_plan == SAMPLE_PLAN
    assert not state.plan_meta.is_fallback
    assert state.plan_meta.budget_per_attendee == 3000
    assert drafting.calls == [(BANGALORE_EVENT, None)]


def test_refinement_notice_and_enrichment(settings):
    drafting = FakeDrafting()
    state = _run(settings, drafting, refinement_text="make it outdoor and extend it")

    plan = state.draft_plan
    assert "## 🔧 REFINEMENTS APPLIED" in plan
    assert plan.index("REFINEMENTS APPLIED") < plan.index(ITINERARY_HEADER)
    assert state.plan_meta.is_refinement
    assert state.plan_meta.refinement_text == "make it outdoor and extend it"

    drafted_event, refinement = drafting.calls[0]
    assert refinement == "make it outdoor and extend it"
    assert "outdoor activities" in drafted_event.tags
    assert drafted_event.duration_hours == 10
    # The pipeline's own event data is not enriched
    assert state.event_data == BANGALORE_EVENT


def test_enrich_for_drafting_shorter():
    event = enrich_for_drafting(BANGALORE_EVENT.evolve(duration_hours=3), "make it shorter", 12)
    assert event.duration_hours == 2


def test_enrich_for_drafting_extend_is_clamped():
    event = enrich_for_drafting(BANGALORE_EVENT.evolve(duration_hours=11), "extend the day", 12)
    assert event.duration_hours == 12


def test_drafting_failure_uses_fallback(settings):
    state = _run(settings, FakeDrafting(error=RuntimeError("model overloaded")))

    assert state.next_stage is Stage.VENUE_SEARCH
    assert state.errors == ()
    assert state.warnings == (
        "Plan generation failed: Drafting API error: model overloaded",
        "Using fallback plan template",
    )
    assert state.plan_meta.is_fallback
    assert state.plan_meta.original_error == "Drafting API error: model overloaded"
    assert state.draft_plan == build_fallback_plan(BANGALORE_EVENT)


def test_drafting_timeout_uses_fallback(settings):
    slow_settings = settings.model_copy(update={"llm": LLMConfig(drafting_timeout_seconds=0.01)})
    state = _run(slow_settings, FakeDrafting(delay=1))

    assert state.next_stage is Stage.VENUE_SEARCH
    assert state.errors == ()
    assert state.plan_meta.is_fallback
    assert state.warnings[0] == "Plan generation failed: Drafting timeout after 0.01s"
    assert state.draft_plan == build_fallback_plan(BANGALORE_EVENT)


def test_empty_plan_uses_fallback(settings):
    state = _run(settings, FakeDrafting(plan="   "))

    assert state.plan_meta.is_fallback
    assert state.warnings[0] == "Plan generation failed: Drafting returned an empty plan"


def test_fallback_plan_contents():
    plan = build_fallback_plan(BANGALORE_EVENT)

    assert plan.startswith("# TRAINING EVENT PLAN")
    assert "Venue Rental: ₹45,000" in plan
    assert "Catering: ₹60,000" in plan
    assert "Total: ₹150,000" in plan


def test_refinement_notice_without_itinerary():
    plan = add_refinement_notice("Just a plan", "add snacks")
    assert plan.endswith("Just a plan")
    assert "**User Request**: add snacks" in plan
