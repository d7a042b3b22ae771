"""Pipeline state threaded through every stage of a planning run.

State objects are frozen. A stage never edits the state it receives; it
returns a copy with its own fields filled in via ``evolve``. Error and
warning sequences are tuples that only ever grow.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Stage(StrEnum):
    """Identifiers of the pipeline stages, including the terminal one."""

    PARSE = "parse"
    VALIDATE = "validate"
    PLAN = "plan"
    VENUE_SEARCH = "venue_search"
    ERROR = "error"
    DONE = "done"


# Forward stages, in execution order. Progress is measured against these.
FORWARD_STAGES: tuple[Stage, ...] = (
    Stage.PARSE,
    Stage.VALIDATE,
    Stage.PLAN,
    Stage.VENUE_SEARCH,
)


class EventType(StrEnum):
    """Kinds of corporate event the planner supports."""

    TRAINING = "training"
    CONFERENCE = "conference"
    OFFSITE = "offsite"
    SEMINAR = "seminar"
    WORKSHOP = "workshop"
    MEETING = "meeting"


class FrozenModel(BaseModel):
    """Base for immutable state records."""

    model_config = ConfigDict(frozen=True)

    def evolve(self, **changes):
        """Return a copy with the given fields replaced."""
        return self.model_copy(update=changes)


# =============================================================================
# Pydantic Models
# =============================================================================


class UserInput(FrozenModel):
    """Request text as supplied by the caller."""

    raw_text: str
    refinement_text: str | None = None

    @property
    def is_refinement(self) -> bool:
        return bool(self.refinement_text)


class EventData(FrozenModel):
    """Structured event description.

    Fields are loosely typed on purpose: Parse writes whatever extraction
    produced and Validate checks ranges and formats afterwards.
    """

    event_type: str
    attendee_count: int
    location: str
    date: str = Field(description="ISO calendar date, YYYY-MM-DD")
    budget: int = Field(description="Whole-event budget in currency units")
    duration_hours: int
    tags: tuple[str, ...] = ()

    @property
    def budget_per_attendee(self) -> int:
        if self.attendee_count <= 0:
            return 0
        return self.budget // self.attendee_count


class ValidationMeta(FrozenModel):
    sanitized: bool = True
    business_rules_applied: bool = True
    validated_at: datetime


class PlanMeta(FrozenModel):
    """Provenance of the drafted plan."""

    generated_at: datetime
    is_refinement: bool = False
    refinement_text: str | None = None
    budget_per_attendee: int | None = None
    is_fallback: bool = False
    original_error: str | None = None


class Venue(FrozenModel):
    """A venue candidate shown to the caller."""

    name: str
    url: str
    description: str
    snippet: str | None = None
    suitability_score: float | None = Field(default=None, ge=0, le=100)
    cost_range: str | None = None
    features: tuple[str, ...] = ()


class SearchCriteria(FrozenModel):
    """Snapshot of what the venue search looked for."""

    event_type: str
    location: str
    capacity: int
    tags: tuple[str, ...] = ()
    query: str | None = None


class VenueMeta(FrozenModel):
    searched_at: datetime
    criteria: SearchCriteria
    total_results: int = 0
    is_fallback: bool = False
    search_strategy: str = "lookup"


class ErrorCategories(FrozenModel):
    """Errors bucketed by kind."""

    validation: tuple[str, ...] = ()
    parsing: tuple[str, ...] = ()
    external: tuple[str, ...] = ()
    system: tuple[str, ...] = ()
    unknown: tuple[str, ...] = ()


class ErrorDetails(FrozenModel):
    """User-facing summary produced when a run fails."""

    message: str
    categories: ErrorCategories = Field(default_factory=ErrorCategories)
    recoverable: bool = False
    suggestions: tuple[str, ...] = ()


class PipelineState(FrozenModel):
    """The record passed from stage to stage within one run."""

    user_input: UserInput
    event_data: EventData | None = None
    validation_meta: ValidationMeta | None = None
    draft_plan: str | None = None
    plan_meta: PlanMeta | None = None
    venues: tuple[Venue, ...] | None = None
    venue_meta: VenueMeta | None = None
    error_details: ErrorDetails | None = None
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    next_stage: Stage = Stage.PARSE
    succeeded: bool = False

    @classmethod
    def initial(cls, raw_text: str, refinement_text: str | None = None) -> "PipelineState":
        """Build the starting state of a run."""
        return cls(
            user_input=UserInput(raw_text=raw_text, refinement_text=refinement_text or None),
            next_stage=Stage.PARSE,
        )

    def with_errors(self, *messages: str) -> "PipelineState":
        return self.evolve(errors=self.errors + tuple(messages))

    def with_warnings(self, *messages: str) -> "PipelineState":
        return self.evolve(warnings=self.warnings + tuple(messages))

    def fail(self, *messages: str) -> "PipelineState":
        """Append errors and route to the error stage."""
        return self.with_errors(*messages).evolve(next_stage=Stage.ERROR)

    def completed_stages(self) -> tuple[Stage, ...]:
        """Forward stages whose output is present in this state."""
        done = []
        if self.event_data is not None:
            done.append(Stage.PARSE)
        if self.validation_meta is not None:
            done.append(Stage.VALIDATE)
        if self.draft_plan:
            done.append(Stage.PLAN)
        if self.venues is not None:
            done.append(Stage.VENUE_SEARCH)
        return tuple(done)

    def used_fallback(self) -> bool:
        return bool(
            (self.plan_meta and self.plan_meta.is_fallback)
            or (self.venue_meta and self.venue_meta.is_fallback)
        )
