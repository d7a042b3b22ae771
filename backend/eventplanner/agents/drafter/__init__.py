"""Drafter Agent package."""

from .main import PlanDrafter, post_process_plan

__all__ = ["PlanDrafter", "post_process_plan"]
