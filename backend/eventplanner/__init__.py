"""Event Planner: turns free-text corporate event requests into plans and venue shortlists."""

__version__ = "0.1.0"
__author__ = "Event Planner Team"

__all__ = ["__version__", "__author__"]
