"""
Unit Tests: Stage contract

Test cases:
- A well-behaved stage passes through run()
- Dropping earlier errors or warnings is a contract violation
- Changing the user input is a contract violation
- Writing another stage's output fields is a contract violation
- Leaving next_stage on the executing stage is a contract violation
"""

import asyncio

import pytest

from eventplanner.pipeline.exceptions import StageContractError
from eventplanner.pipeline.stages import BaseStage
from eventplanner.pipeline.state import PipelineState, Stage, UserInput
from tests.fakes import BANGALORE_EVENT


class ScriptedStage(BaseStage):
    stage = Stage.PLAN

    def __init__(self, transform):
        self.transform = transform

    async def execute(self, state):
        return self.transform(state)


def _state() -> PipelineState:
    return (
        PipelineState.initial("Team meeting for 10 people in Pune")
        .with_errors("earlier error")
        .with_warnings("earlier warning")
        .evolve(next_stage=Stage.PLAN)
    )


def test_well_behaved_stage_passes():
    stage = ScriptedStage(
        lambda s: s.with_warnings("new warning").evolve(next_stage=Stage.VENUE_SEARCH)
    )

    result = asyncio.run(stage.run(_state()))

    assert result.warnings == ("earlier warning", "new warning")
    assert result.next_stage is Stage.VENUE_SEARCH


@pytest.mark.parametrize(
    "transform,message",
    [
        (lambda s: s.evolve(errors=(), next_stage=Stage.ERROR), "errors"),
        (lambda s: s.evolve(warnings=("other",), next_stage=Stage.ERROR), "warnings"),
        (
            lambda s: s.evolve(
                user_input=UserInput(raw_text="something else"), next_stage=Stage.ERROR
            ),
            "user input",
        ),
        (
            lambda s: s.evolve(event_data=BANGALORE_EVENT, next_stage=Stage.VENUE_SEARCH),
            "does not own: event_data",
        ),
        (
            lambda s: s.evolve(venues=(), succeeded=True, next_stage=Stage.DONE),
            "does not own: succeeded, venues",
        ),
        (lambda s: s.evolve(draft_plan="plan"), "did not select a next stage"),
    ],
)
def test_contract_violations_raise(transform, message):
    with pytest.raises(StageContractError, match=message) as exc_info:
        asyncio.run(ScriptedStage(transform).run(_state()))

    assert exc_info.value.stage is Stage.PLAN
