"""Base class for pipeline stage executors.

Subclasses implement ``execute``. ``run`` wraps it with:
- a logfire span and timing
- a contract check: the returned state must keep every earlier error and
  warning in order, may only change the output fields its stage owns, and
  must choose its next stage explicitly
"""

import logging
import time
from abc import ABC, abstractmethod

import logfire

from eventplanner.pipeline.exceptions import StageContractError
from eventplanner.pipeline.state import PipelineState, Stage

logger = logging.getLogger(__name__)

# Output fields each stage may write. Validate only sanitizes event_data.
STAGE_OUTPUTS: dict[Stage, frozenset[str]] = {
    Stage.PARSE: frozenset({"event_data"}),
    Stage.VALIDATE: frozenset({"event_data", "validation_meta"}),
    Stage.PLAN: frozenset({"draft_plan", "plan_meta"}),
    Stage.VENUE_SEARCH: frozenset({"venues", "venue_meta", "succeeded"}),
    Stage.ERROR: frozenset({"error_details", "succeeded"}),
}

OUTPUT_FIELDS = frozenset().union(*STAGE_OUTPUTS.values())


class BaseStage(ABC):
    """A single step of the planning pipeline."""

    stage: Stage

    @abstractmethod
    async def execute(self, state: PipelineState) -> PipelineState:
        """Return a new state with this stage's output and ``next_stage`` set."""

    async def run(self, state: PipelineState) -> PipelineState:
        start = time.time()
        with logfire.span("stage {stage}", stage=self.stage.value) as span:
            new_state = await self.execute(state)
            duration = time.time() - start
            span.set_attribute("duration_ms", round(duration * 1000, 2))
            span.set_attribute("next_stage", str(new_state.next_stage))
            span.set_attribute("errors", len(new_state.errors))
            span.set_attribute("warnings", len(new_state.warnings))

        self._check_contract(state, new_state)
        logger.info(
            f"Stage {self.stage} finished in {duration:.2f}s -> {new_state.next_stage}"
        )
        return new_state

    def _check_contract(self, before: PipelineState, after: PipelineState) -> None:
        if after.errors[: len(before.errors)] != before.errors:
            raise StageContractError(
                f"Stage {self.stage} dropped or reordered earlier errors", stage=self.stage
            )
        if after.warnings[: len(before.warnings)] != before.warnings:
            raise StageContractError(
                f"Stage {self.stage} dropped or reordered earlier warnings", stage=self.stage
            )
        if after.user_input != before.user_input:
            raise StageContractError(
                f"Stage {self.stage} modified the user input", stage=self.stage
            )
        foreign = sorted(
            field
            for field in OUTPUT_FIELDS - STAGE_OUTPUTS[self.stage]
            if getattr(after, field) != getattr(before, field)
        )
        if foreign:
            raise StageContractError(
                f"Stage {self.stage} wrote fields it does not own: {', '.join(foreign)}",
                stage=self.stage,
            )
        if after.next_stage is self.stage:
            raise StageContractError(
                f"Stage {self.stage} did not select a next stage", stage=self.stage
            )
