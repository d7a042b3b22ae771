"""
Unit Tests: Parse stage

Test cases:
- Extracted event data is stored and routed to validation
- Refinement text is appended to the extraction input and applied to fields
- Extraction failures, timeouts and empty results route to the error stage
"""

import asyncio

from eventplanner.config import LLMConfig
from eventplanner.pipeline.stages import ParseStage
from eventplanner.pipeline.stages.parse import (
    NOT_UNDERSTOOD,
    REFINEMENT_SEPARATOR,
    apply_refinement,
    combine_input,
)
from eventplanner.pipeline.state import PipelineState, Stage
from tests.fakes import BANGALORE_EVENT, BANGALORE_REQUEST, FakeExtraction


def _run(stage, raw_text=BANGALORE_REQUEST, refinement_text=None):
    return asyncio.run(stage.run(PipelineState.initial(raw_text, refinement_text)))


def test_parse_success(settings):
    extraction = FakeExtraction()
    state = _run(ParseStage(extraction, settings))

    assert state.event_data == BANGALORE_EVENT
    assert state.next_stage is Stage.VALIDATE
    assert state.errors == ()
    assert extraction.calls == [BANGALORE_REQUEST]


def test_combine_input():
    assert combine_input("base", None) == "base"
    assert combine_input("base", "make it outdoor") == f"base{REFINEMENT_SEPARATOR}make it outdoor"


def test_parse_with_refinement(settings):
    extraction = FakeExtraction()
    state = _run(ParseStage(extraction, settings), refinement_text="make it outdoor")

    assert "outdoor" in state.event_data.tags
    assert extraction.calls == [combine_input(BANGALORE_REQUEST, "make it outdoor")]


def test_apply_refinement_tags_and_duration():
    event = apply_refinement(BANGALORE_EVENT, "Half day, more interactive with tech demos", 12)

    assert event.duration_hours == 4
    assert {"interactive", "technology"} <= set(event.tags)


def test_apply_refinement_premium_raises_budget():
    event = apply_refinement(BANGALORE_EVENT, "make it premium", 12)
    assert event.budget == 195000


def test_apply_refinement_multi_day_is_clamped():
    event = apply_refinement(BANGALORE_EVENT, "turn it into a multi-day retreat", 12)
    assert event.duration_hours == 12


def test_apply_refinement_tags_come_first():
    full = BANGALORE_EVENT.evolve(tags=tuple(f"req{i}" for i in range(10)))

    event = apply_refinement(full, "make it outdoor", 12)

    assert event.tags[0] == "outdoor"
    assert event.tags[1:] == full.tags


def test_apply_refinement_keeps_existing_tags():
    event = apply_refinement(BANGALORE_EVENT.evolve(tags=("outdoor",)), "add an outdoor lunch", 12)
    assert event.tags == ("outdoor",)


def test_extraction_failure(settings):
    state = _run(ParseStage(FakeExtraction(error=RuntimeError("quota exceeded")), settings))

    assert state.next_stage is Stage.ERROR
    assert state.errors == ("Parsing failed: Extraction API error: quota exceeded",)
    assert state.event_data is None


def test_extraction_timeout(settings):
    settings = settings.model_copy(update={"llm": LLMConfig(extraction_timeout_seconds=0.01)})
    state = _run(ParseStage(FakeExtraction(delay=1), settings))

    assert state.next_stage is Stage.ERROR
    assert state.errors == ("Parsing failed: Extraction timeout after 0.01s",)


def test_nothing_understood(settings):
    state = _run(ParseStage(FakeExtraction(result=None), settings))

    assert state.next_stage is Stage.ERROR
    assert state.errors == (NOT_UNDERSTOOD,)
