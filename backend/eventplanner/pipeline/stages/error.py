"""Error stage: categorize accumulated errors and build the user-facing summary."""

import logging
from collections.abc import Sequence

from eventplanner.pipeline.stages.base import BaseStage
from eventplanner.pipeline.state import ErrorCategories, ErrorDetails, PipelineState, Stage

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "System error occurred. Please try again."

# Checked in order; the first matching category wins.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("validation", ("validation", "invalid")),
    ("parsing", ("parsing", "understand")),
    ("external", ("api", "network", "timeout")),
    ("system", ("system", "internal")),
)

SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "validation": (
        "Check that all required fields are provided",
        "Ensure dates are in the future and budget is reasonable",
        "Verify location is a valid city name",
    ),
    "parsing": (
        "Include more details about your event",
        "Specify: event type, attendee count, location, date, and budget",
        "Use clear, simple language",
    ),
    "external": (
        "Try again in a few minutes",
        "Check your internet connection",
        "Some advanced features may be temporarily unavailable",
    ),
    "system": (
        "Wait a moment and try again",
        "Contact support if the problem persists",
    ),
}


def categorize_errors(errors: Sequence[str]) -> ErrorCategories:
    buckets: dict[str, list[str]] = {
        "validation": [], "parsing": [], "external": [], "system": [], "unknown": [],
    }
    for error in errors:
        lowered = error.lower()
        category = next(
            (name for name, keywords in CATEGORY_KEYWORDS if any(k in lowered for k in keywords)),
            "unknown",
        )
        buckets[category].append(error)
    return ErrorCategories(**{name: tuple(items) for name, items in buckets.items()})


def user_message(categories: ErrorCategories) -> str:
    if categories.validation:
        return f"Please check your input: {categories.validation[0]}"
    if categories.parsing:
        return (
            "I couldn't understand your event requirements. Please include: event type, "
            "number of people, location, date, and budget."
        )
    if categories.external:
        return (
            "Some external services are temporarily unavailable. Please try again "
            "shortly; some features may be limited."
        )
    if categories.system:
        return "A system error occurred. Please try again in a moment."
    return (
        "Something went wrong. Please try rephrasing your request or contact support "
        "if the issue persists."
    )


def is_recoverable(categories: ErrorCategories) -> bool:
    if categories.validation or categories.parsing:
        return True
    return bool(categories.external) and not categories.system


def recovery_suggestions(categories: ErrorCategories) -> tuple[str, ...]:
    suggestions: list[str] = []
    for name, items in SUGGESTIONS.items():
        if getattr(categories, name):
            suggestions.extend(items)
    return tuple(suggestions)


def summarize_errors(errors: Sequence[str]) -> ErrorDetails:
    """Full error summary for a list of error messages."""
    categories = categorize_errors(errors)
    return ErrorDetails(
        message=user_message(categories),
        categories=categories,
        recoverable=is_recoverable(categories),
        suggestions=recovery_suggestions(categories),
    )


class ErrorStage(BaseStage):
    stage = Stage.ERROR

    async def execute(self, state: PipelineState) -> PipelineState:
        try:
            details = summarize_errors(state.errors)
        except Exception as e:
            logger.error(f"Error handler itself failed: {e}")
            details = ErrorDetails(message=GENERIC_FAILURE_MESSAGE)

        logger.error(
            f"Pipeline failed with {len(state.errors)} errors: "
            f"{details.categories.model_dump()} "
            f"(has_event_data={state.event_data is not None}, "
            f"has_plan={state.draft_plan is not None}, warnings={len(state.warnings)})"
        )
        return state.evolve(error_details=details, succeeded=False, next_stage=Stage.DONE)
