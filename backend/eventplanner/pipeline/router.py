"""Transition table and routing for the planning pipeline."""

import logging

from eventplanner.pipeline.state import PipelineState, Stage

logger = logging.getLogger(__name__)

# Each executable stage maps to (forward edge, failure edge).
TRANSITIONS: dict[Stage, tuple[Stage, Stage]] = {
    Stage.PARSE: (Stage.VALIDATE, Stage.ERROR),
    Stage.VALIDATE: (Stage.PLAN, Stage.ERROR),
    Stage.PLAN: (Stage.VENUE_SEARCH, Stage.ERROR),
    Stage.VENUE_SEARCH: (Stage.DONE, Stage.ERROR),
    Stage.ERROR: (Stage.DONE, Stage.DONE),
}

INITIAL_STAGE = Stage.PARSE
TERMINAL_STAGE = Stage.DONE


def legal_targets(stage: Stage) -> frozenset[Stage]:
    """Stages that may legally follow ``stage``."""
    if stage not in TRANSITIONS:
        return frozenset()
    return frozenset(TRANSITIONS[stage])


def is_legal_transition(source: Stage, target: Stage) -> bool:
    return target in legal_targets(source)


def route(executed: Stage, state: PipelineState) -> Stage:
    """Return the stage to run after ``executed``.

    The stage's own choice in ``state.next_stage`` is honoured when it is a
    legal edge. Anything else is an internal fault and goes to the error
    stage, or straight to done when the error stage itself misbehaved.
    """
    proposed = state.next_stage
    if is_legal_transition(executed, proposed):
        return proposed

    fallback = Stage.DONE if executed is Stage.ERROR else Stage.ERROR
    logger.error(
        f"Illegal transition {executed} -> {proposed}; routing to {fallback}"
    )
    return fallback


def validate_transition_table() -> list[str]:
    """Check that the table is total and well formed. Returns problems found."""
    problems: list[str] = []

    for stage in Stage:
        if stage is TERMINAL_STAGE:
            if stage in TRANSITIONS:
                problems.append(f"Terminal stage {stage} must not have outgoing edges")
            continue
        if stage not in TRANSITIONS:
            problems.append(f"Stage {stage} has no transitions")
            continue

        forward, failure = TRANSITIONS[stage]
        if stage is Stage.ERROR:
            if forward is not TERMINAL_STAGE or failure is not TERMINAL_STAGE:
                problems.append("Error stage must only lead to done")
        elif failure is not Stage.ERROR:
            problems.append(f"Stage {stage} must fail over to the error stage")
        elif forward is stage:
            problems.append(f"Stage {stage} must not loop onto itself")

    # Forward edges from the initial stage must reach done.
    seen = set()
    current = INITIAL_STAGE
    while current is not TERMINAL_STAGE:
        if current in seen or current not in TRANSITIONS:
            problems.append(f"Forward path from {INITIAL_STAGE} does not reach {TERMINAL_STAGE}")
            break
        seen.add(current)
        current = TRANSITIONS[current][0]

    return problems
