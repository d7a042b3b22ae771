"""Event planning pipeline: stages, routing and orchestration."""

from .capabilities import Capabilities, build_capabilities
from .formatter import FormattedResult
from .orchestrator import EventPlanner, HealthStatus
from .state import EventData, PipelineState, Stage

__all__ = [
    "Capabilities",
    "EventData",
    "EventPlanner",
    "FormattedResult",
    "HealthStatus",
    "PipelineState",
    "Stage",
    "build_capabilities",
]
