"""Stage executors, one per pipeline stage."""

from .base import BaseStage
from .error import ErrorStage, summarize_errors
from .parse import ParseStage
from .plan import PlanStage
from .validate import ValidateStage
from .venue_search import VenueSearchStage

__all__ = [
    "BaseStage",
    "ErrorStage",
    "ParseStage",
    "PlanStage",
    "ValidateStage",
    "VenueSearchStage",
    "summarize_errors",
]
