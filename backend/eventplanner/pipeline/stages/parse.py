"""Parse stage: free text to structured event data."""

import logging

from eventplanner.config import Settings
from eventplanner.pipeline.capabilities import Extraction, call_capability
from eventplanner.pipeline.exceptions import CapabilityError
from eventplanner.pipeline.stages.base import BaseStage
from eventplanner.pipeline.state import EventData, PipelineState, Stage

logger = logging.getLogger(__name__)

REFINEMENT_SEPARATOR = "\n\nAdditional requirements: "

PREMIUM_BUDGET_MULTIPLIER = 1.3

# Tag added when any of its keywords appears in the refinement text.
REFINEMENT_TAG_KEYWORDS: dict[str, tuple[str, ...]] = {
    "interactive": ("interactive", "engagement", "hands-on"),
    "team building": ("team building", "team bonding", "bonding"),
    "outdoor": ("outdoor", "outside", "garden"),
    "technology": ("technology", "tech", "digital"),
    "premium": ("premium", "luxury", "high-end"),
    "networking": ("networking", "connections"),
    "guest speakers": ("speaker", "expert", "industry"),
    "cultural": ("cultural", "traditional", "local"),
}

NOT_UNDERSTOOD = (
    "Could not understand the event requirements. Please include: event type, "
    "number of people, location, date, and budget."
)


def combine_input(raw_text: str, refinement_text: str | None) -> str:
    if not refinement_text:
        return raw_text
    return f"{raw_text}{REFINEMENT_SEPARATOR}{refinement_text}"


def apply_refinement(event: EventData, refinement_text: str, max_duration: int) -> EventData:
    """Adjust extracted fields from refinement keywords."""
    text = refinement_text.lower()

    added = [
        tag
        for tag, keywords in REFINEMENT_TAG_KEYWORDS.items()
        if any(keyword in text for keyword in keywords)
    ]

    duration = event.duration_hours
    if "half day" in text or "half-day" in text:
        duration = 4
    elif "full day" in text or "full-day" in text:
        duration = 8
    elif "multi-day" in text or "multiple days" in text:
        duration = max_duration

    budget = event.budget
    if "premium" in added and budget:
        budget = int(budget * PREMIUM_BUDGET_MULTIPLIER)

    if added:
        logger.info(f"Refinement added tags: {added}")

    return event.evolve(
        tags=tuple(dict.fromkeys([*added, *event.tags])),
        duration_hours=duration,
        budget=budget,
    )


class ParseStage(BaseStage):
    stage = Stage.PARSE

    def __init__(self, extraction: Extraction, settings: Settings):
        self.extraction = extraction
        self.settings = settings

    async def execute(self, state: PipelineState) -> PipelineState:
        user_input = state.user_input
        text = combine_input(user_input.raw_text, user_input.refinement_text)

        try:
            event = await call_capability(
                "Extraction",
                self.extraction.extract(text),
                self.settings.llm.extraction_timeout_seconds,
            )
        except CapabilityError as e:
            logger.error(f"Parsing failed: {e}")
            return state.fail(f"Parsing failed: {e}")

        if not isinstance(event, EventData):
            return state.fail(NOT_UNDERSTOOD)

        if user_input.refinement_text:
            event = apply_refinement(
                event, user_input.refinement_text, self.settings.planner.max_duration_hours
            )

        logger.info(
            f"Parsed {event.event_type} for {event.attendee_count} people in "
            f"{event.location} (refinement={user_input.is_refinement})"
        )
        return state.evolve(event_data=event, next_stage=Stage.VALIDATE)
