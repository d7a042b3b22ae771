"""Plan stage: draft the event plan, falling back to a template on failure."""

import logging
from datetime import datetime, timezone

from eventplanner.config import Settings
from eventplanner.pipeline.capabilities import Drafting, call_capability
from eventplanner.pipeline.exceptions import CapabilityError
from eventplanner.pipeline.plan_template import add_refinement_notice, build_fallback_plan
from eventplanner.pipeline.stages.base import BaseStage
from eventplanner.pipeline.state import EventData, PipelineState, PlanMeta, Stage

logger = logging.getLogger(__name__)

# Phrases passed to drafting when the refinement mentions any keyword.
DRAFTING_ENRICHMENTS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("interactive", "hands-on"), ("interactive sessions", "hands-on activities")),
    (("team building", "team bonding"), ("team building activities", "group exercises")),
    (("technology", "digital", "tech"), ("technology integration", "digital tools")),
    (("outdoor", "nature"), ("outdoor activities", "fresh air breaks")),
    (("networking", "connections"), ("networking sessions", "connection building")),
    (("cultural", "local"), ("cultural activities", "local traditions")),
    (("speaker", "expert"), ("guest speakers", "industry experts")),
    (("creative", "innovation"), ("creative workshops", "innovation sessions")),
)

DURATION_STEP_HOURS = 2
MIN_SHORTENED_HOURS = 2


def enrich_for_drafting(event: EventData, refinement_text: str, max_duration: int) -> EventData:
    """Return a copy of ``event`` carrying refinement hints for the drafter.

    The copy only feeds the drafting prompt; the pipeline's event data is
    left as Validate wrote it.
    """
    text = refinement_text.lower()
    extra = [
        phrase
        for keywords, phrases in DRAFTING_ENRICHMENTS
        if any(keyword in text for keyword in keywords)
        for phrase in phrases
    ]

    duration = event.duration_hours
    if "extend" in text or "longer" in text:
        duration = min(max_duration, duration + DURATION_STEP_HOURS)
    elif "shorter" in text or "compact" in text:
        duration = max(MIN_SHORTENED_HOURS, duration - DURATION_STEP_HOURS)

    return event.evolve(
        tags=tuple(dict.fromkeys([*event.tags, *extra])),
        duration_hours=duration,
    )


class PlanStage(BaseStage):
    stage = Stage.PLAN

    def __init__(self, drafting: Drafting, settings: Settings):
        self.drafting = drafting
        self.settings = settings

    async def execute(self, state: PipelineState) -> PipelineState:
        event = state.event_data
        if event is None:
            return state.fail("Invalid state: no event data for plan generation")

        refinement = state.user_input.refinement_text
        drafting_event = (
            enrich_for_drafting(event, refinement, self.settings.planner.max_duration_hours)
            if refinement
            else event
        )

        try:
            plan = await call_capability(
                "Drafting",
                self.drafting.draft(drafting_event, refinement),
                self.settings.llm.drafting_timeout_seconds,
            )
            if not isinstance(plan, str) or not plan.strip():
                raise CapabilityError("Drafting returned an empty plan", capability="Drafting")
        except CapabilityError as e:
            logger.warning(f"Plan drafting failed, using fallback template: {e}")
            return self._fallback(state, event, str(e))

        if refinement:
            plan = add_refinement_notice(plan, refinement)

        meta = PlanMeta(
            generated_at=datetime.now(timezone.utc),
            is_refinement=bool(refinement),
            refinement_text=refinement,
            budget_per_attendee=drafting_event.budget_per_attendee,
        )
        logger.info(f"Plan generated ({len(plan)} chars)")
        return state.evolve(draft_plan=plan, plan_meta=meta, next_stage=Stage.VENUE_SEARCH)

    def _fallback(self, state: PipelineState, event: EventData, error: str) -> PipelineState:
        refinement = state.user_input.refinement_text
        try:
            plan = build_fallback_plan(event, self.settings.planner.currency_symbol)
        except Exception as e:
            logger.error(f"Fallback plan generation failed: {e}")
            return state.fail(
                f"Plan generation failed: {error}",
                f"Internal error: fallback plan also failed: {e}",
            )

        if refinement:
            plan = add_refinement_notice(plan, refinement)

        meta = PlanMeta(
            generated_at=datetime.now(timezone.utc),
            is_refinement=bool(refinement),
            refinement_text=refinement,
            budget_per_attendee=event.budget_per_attendee,
            is_fallback=True,
            original_error=error,
        )
        return state.with_warnings(
            f"Plan generation failed: {error}",
            "Using fallback plan template",
        ).evolve(draft_plan=plan, plan_meta=meta, next_stage=Stage.VENUE_SEARCH)
