"""Pipeline orchestrator: drives stages from parse to done.

``EventPlanner`` owns the stage executors and the result cache. It is built
once per process (FastAPI lifespan or CLI command), started, and closed on
shutdown.
"""

import logging
import time
import uuid
from datetime import date, datetime, timezone
from typing import Callable, assert_never

import logfire
from pydantic import BaseModel, Field

from eventplanner.config import Settings
from eventplanner.pipeline import rules
from eventplanner.pipeline.capabilities import Capabilities
from eventplanner.pipeline.exceptions import RoutingError
from eventplanner.pipeline.formatter import (
    FormattedResult,
    format_result,
    minimal_failure,
    strip_run_metadata,
)
from eventplanner.pipeline.router import route, validate_transition_table
from eventplanner.pipeline.stages import (
    BaseStage,
    ErrorStage,
    ParseStage,
    PlanStage,
    ValidateStage,
    VenueSearchStage,
    summarize_errors,
)
from eventplanner.pipeline.stages.error import GENERIC_FAILURE_MESSAGE
from eventplanner.pipeline.state import FORWARD_STAGES, PipelineState, Stage
from eventplanner.storage.cache import CacheStats, ResultCache, make_cache_key

logger = logging.getLogger(__name__)

HEALTH_CHECK_INPUT = "Health check meeting for 5 people in Mumbai tomorrow. Budget ₹10,000."

BASIC_EXAMPLES: tuple[str, ...] = (
    "Corporate training for 50 people in Bangalore on June 10th. Budget ₹1.5 lakhs.",
    "Team offsite for 30 people in Goa next Friday. Budget 2 lakhs. Need vegetarian food.",
    "Leadership seminar for 25 executives in Mumbai on December 15th. Budget ₹3 lakhs.",
    "Annual conference for 100 people in Delhi on March 20th. Budget ₹5 lakhs. Premium setup.",
)

REFINEMENT_EXAMPLES: tuple[dict[str, object], ...] = (
    {
        "original": BASIC_EXAMPLES[0],
        "refinements": [
            "Make it more interactive with team building activities",
            "Focus on technology training specifically",
            "Add outdoor activities during breaks",
            "Include guest speakers from the industry",
        ],
    },
    {
        "original": "Team offsite for 30 people in Goa next Friday. Budget 2 lakhs.",
        "refinements": [
            "Make it a beach-themed event",
            "Add water sports activities",
            "Focus on leadership development",
            "Include cultural evening program",
        ],
    },
)


class HealthStatus(BaseModel):
    """Result of a trial run through the whole pipeline."""

    status: str
    components: dict[str, str] = Field(default_factory=dict)
    transition_table_valid: bool = True
    transition_problems: list[str] = Field(default_factory=list)
    test_success: bool = False
    test_elapsed_seconds: float | None = None
    test_errors: list[str] = Field(default_factory=list)
    error: str | None = None


class EventPlanner:
    """Runs planning requests through the stage pipeline."""

    def __init__(
        self,
        settings: Settings,
        capabilities: Capabilities,
        cache: ResultCache[FormattedResult] | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.settings = settings
        self.cache = cache if cache is not None else ResultCache(settings.cache)
        self._parse = ParseStage(capabilities.extraction, settings)
        self._validate = ValidateStage(settings, today=today)
        self._plan = PlanStage(capabilities.drafting, settings)
        self._venue_search = VenueSearchStage(capabilities.lookup, settings)
        self._error = ErrorStage()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        if self.settings.cache.enabled:
            self.cache.start_sweeper()
        logger.info("Event planner started")

    def close(self) -> None:
        self.cache.stop_sweeper()
        logger.info("Event planner stopped")

    # =========================================================================
    # Public operations
    # =========================================================================

    async def run(
        self,
        raw_text: str,
        refinement_text: str | None = None,
        use_cache: bool = True,
    ) -> FormattedResult:
        """Plan an event from free text, optionally refining it."""
        start = time.time()
        request_id = uuid.uuid4().hex[:12]
        refinement_text = refinement_text.strip() if refinement_text and refinement_text.strip() else None

        errors = rules.check_raw_input(raw_text, self.settings.planner)
        if refinement_text:
            errors += rules.check_refinement_text(refinement_text, self.settings.planner)
        if errors:
            logger.warning(f"[{request_id}] Request rejected: {errors}")
            return self._rejected(raw_text or "", refinement_text, errors, start, request_id)

        caching = use_cache and self.settings.cache.enabled and refinement_text is None
        cache_key = make_cache_key(raw_text) if caching else None

        if cache_key:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.info(f"[{request_id}] Cache hit")
                return cached.model_copy(
                    deep=True,
                    update={
                        "cached": True,
                        "elapsed_seconds": round(time.time() - start, 3),
                        "timestamp": datetime.now(timezone.utc),
                        "analytics": cached.analytics.model_copy(
                            deep=True, update={"request_id": request_id}
                        ),
                    }
                )

        with logfire.span(
            "event planning run", request_id=request_id, is_refinement=refinement_text is not None
        ):
            try:
                state, path, timings = await self._drive(
                    PipelineState.initial(raw_text.strip(), refinement_text), request_id
                )
                result = format_result(
                    state,
                    elapsed_seconds=time.time() - start,
                    request_id=request_id,
                    execution_path=path,
                    stage_timings_ms=timings,
                )
            except Exception as e:
                logger.exception(f"[{request_id}] Pipeline failed unexpectedly: {e}")
                return minimal_failure(GENERIC_FAILURE_MESSAGE, time.time() - start, request_id)

        if cache_key and result.success:
            self.cache.set(cache_key, strip_run_metadata(result))

        logger.info(
            f"[{request_id}] Run finished success={result.success} "
            f"in {result.elapsed_seconds}s via {' -> '.join(path)}"
        )
        return result

    async def refine(self, original_text: str, refinement_text: str) -> FormattedResult:
        """Re-plan ``original_text`` with additional requirements."""
        start = time.time()
        errors = rules.check_refinement_text(refinement_text, self.settings.planner)
        if errors:
            request_id = uuid.uuid4().hex[:12]
            return self._rejected(original_text or "", refinement_text, errors, start, request_id)
        return await self.run(original_text, refinement_text)

    async def health_check(self) -> HealthStatus:
        """Trial run with a canned input, bypassing the cache."""
        problems = validate_transition_table()
        try:
            result = await self.run(HEALTH_CHECK_INPUT, use_cache=False)
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return HealthStatus(
                status="unhealthy",
                transition_table_valid=not problems,
                transition_problems=problems,
                error=str(e),
            )

        completed = set(result.analytics.stages_completed)
        components = {
            str(stage): "operational" if str(stage) in completed else "not_reached"
            for stage in FORWARD_STAGES
        }
        healthy = result.success and not problems
        return HealthStatus(
            status="healthy" if healthy else "unhealthy",
            components=components,
            transition_table_valid=not problems,
            transition_problems=problems,
            test_success=result.success,
            test_elapsed_seconds=result.elapsed_seconds,
            test_errors=result.errors,
        )

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def clear_cache(self) -> int:
        return self.cache.clear()

    @staticmethod
    def examples() -> dict[str, object]:
        return {
            "basic_examples": list(BASIC_EXAMPLES),
            "refinement_examples": [dict(example) for example in REFINEMENT_EXAMPLES],
            "stages": [str(stage) for stage in FORWARD_STAGES],
        }

    # =========================================================================
    # Internals
    # =========================================================================

    def _executor_for(self, stage: Stage) -> BaseStage:
        match stage:
            case Stage.PARSE:
                return self._parse
            case Stage.VALIDATE:
                return self._validate
            case Stage.PLAN:
                return self._plan
            case Stage.VENUE_SEARCH:
                return self._venue_search
            case Stage.ERROR:
                return self._error
            case Stage.DONE:
                raise RoutingError("The done stage has no executor")
            case _:
                assert_never(stage)

    async def _drive(
        self, state: PipelineState, request_id: str
    ) -> tuple[PipelineState, list[str], dict[str, float]]:
        stage = state.next_stage
        path: list[str] = []
        timings: dict[str, float] = {}

        while stage is not Stage.DONE:
            executor = self._executor_for(stage)
            started = time.time()
            try:
                new_state = await executor.run(state)
            except Exception as e:
                if stage is Stage.ERROR:
                    raise
                logger.exception(f"[{request_id}] Stage {stage} raised: {e}")
                new_state = state.fail(f"Internal system error during {stage} stage: {e}")

            timings[str(stage)] = round((time.time() - started) * 1000, 2)
            path.append(str(stage))

            next_stage = route(stage, new_state)
            if next_stage is not new_state.next_stage:
                new_state = new_state.with_errors(
                    f"Internal system fault: {stage} selected illegal next stage "
                    f"{new_state.next_stage}"
                ).evolve(next_stage=next_stage)

            state, stage = new_state, next_stage

        return state, path, timings

    def _rejected(
        self,
        raw_text: str,
        refinement_text: str | None,
        errors: list[str],
        start: float,
        request_id: str,
    ) -> FormattedResult:
        state = PipelineState(
            user_input=PipelineState.initial(raw_text, refinement_text).user_input,
            errors=tuple(errors),
            error_details=summarize_errors(errors),
            next_stage=Stage.DONE,
        )
        return format_result(state, elapsed_seconds=time.time() - start, request_id=request_id)
