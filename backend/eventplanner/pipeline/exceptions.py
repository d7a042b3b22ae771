"""Exception hierarchy for the planning pipeline.

Hierarchy:
    PipelineError
    ├── CapabilityError          external capability call failed
    │   └── CapabilityTimeoutError
    ├── StageContractError       a stage returned a state that breaks the contract
    └── RoutingError             dispatch reached a stage with no executor
"""


class PipelineError(Exception):
    """Base exception for pipeline failures."""


class CapabilityError(PipelineError):
    """An external capability (extraction, drafting, lookup) failed."""

    def __init__(self, message: str, capability: str | None = None):
        super().__init__(message)
        self.capability = capability


class CapabilityTimeoutError(CapabilityError):
    """An external capability did not answer within its timeout."""


class StageContractError(PipelineError):
    """A stage executor broke the state contract (for example, dropped errors)."""

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        self.stage = stage


class RoutingError(PipelineError):
    """The orchestrator was asked to execute a stage that has no executor."""
