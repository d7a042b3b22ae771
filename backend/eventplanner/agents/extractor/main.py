"""Extractor Agent: natural-language event request to structured event data."""

import logging
import re
from datetime import date, timedelta
from typing import Callable

from pydantic_ai import Agent

from eventplanner.agents.agent_factory import AgentFactory
from eventplanner.agents.extractor.fallback import fallback_parse
from eventplanner.agents.extractor.models import ExtractedEvent
from eventplanner.agents.extractor.prompts import (
    EXTRACTOR_SYSTEM_PROMPT,
    build_extraction_prompt,
)
from eventplanner.config import PlannerConfig, Settings
from eventplanner.pipeline.state import EventData, EventType

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DEFAULT_ATTENDEES = 20
DEFAULT_LOCATION = "Mumbai"
DEFAULT_BUDGET = 50000


def _create_agent(model: str) -> Agent[None, ExtractedEvent]:
    return Agent(
        model=model,
        output_type=ExtractedEvent,
        system_prompt=EXTRACTOR_SYSTEM_PROMPT,
        defer_model_check=True,
    )


def post_process(extracted: ExtractedEvent, config: PlannerConfig, today: date) -> EventData:
    """Fill defaults and clamp extracted values into plausible ranges."""
    tomorrow = (today + timedelta(days=1)).isoformat()

    event_type = (extracted.event_type or "").strip().lower()
    if event_type not in {t.value for t in EventType}:
        event_type = EventType.MEETING.value

    event_date = (extracted.date or "").strip()
    if not _ISO_DATE.match(event_date):
        event_date = tomorrow

    duration = extracted.duration_hours or config.default_event_duration

    return EventData(
        event_type=event_type,
        attendee_count=max(1, extracted.attendee_count or DEFAULT_ATTENDEES),
        location=(extracted.location or "").strip() or DEFAULT_LOCATION,
        date=event_date,
        budget=max(config.min_budget, extracted.budget or DEFAULT_BUDGET),
        duration_hours=max(1, min(config.max_duration_hours, duration)),
        tags=tuple(dict.fromkeys(r.strip().lower() for r in extracted.requirements if r.strip())),
    )


class EventExtractor:
    """Extraction capability: a pydantic-ai agent with a pattern-based fallback."""

    def __init__(
        self,
        settings: Settings,
        today: Callable[[], date] | None = None,
        factory: AgentFactory[None, ExtractedEvent] | None = None,
    ):
        self.settings = settings
        self._today = today or date.today
        self._factory = factory or AgentFactory(
            settings, settings.llm.extraction_model, _create_agent
        )

    @property
    def agent(self) -> Agent[None, ExtractedEvent]:
        return self._factory.get_agent()

    async def extract(self, text: str) -> EventData | None:
        """Extract event data, or None when the text holds no usable request."""
        today = self._today()
        prompt = build_extraction_prompt(text, today)

        try:
            logger.info("Calling LLM for input extraction...")
            result = await self.agent.run(
                prompt,
                model_settings={
                    "temperature": self.settings.llm.extraction_temperature,
                    "timeout": self.settings.llm.extraction_request_timeout_seconds,
                },
            )
            extracted: ExtractedEvent | None = result.output
        except Exception as e:
            if not self.settings.planner.enable_fallback_parsing:
                raise
            logger.error(f"Input extraction failed: {e}")
            extracted = fallback_parse(text, today)

        if extracted is None or not extracted.is_event_request:
            logger.info("No event request found in input")
            return None

        event = post_process(extracted, self.settings.planner, today)
        logger.info(f"Input extraction successful: {event.model_dump()}")
        return event
