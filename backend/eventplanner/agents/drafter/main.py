"""Drafter Agent: writes the long-form event plan."""

import logging
import re

from pydantic_ai import Agent

from eventplanner.agents.agent_factory import AgentFactory
from eventplanner.agents.drafter.prompts import DRAFTER_SYSTEM_PROMPT, build_plan_prompt
from eventplanner.config import Settings
from eventplanner.pipeline.plan_template import plan_header
from eventplanner.pipeline.state import EventData

logger = logging.getLogger(__name__)

# Bare upper-case lines that the model meant as section headings.
_BARE_HEADING = re.compile(r"^([A-Z][A-Z &]+)$", re.MULTILINE)


def _create_agent(model: str) -> Agent[None, str]:
    return Agent(
        model=model,
        output_type=str,
        system_prompt=DRAFTER_SYSTEM_PROMPT,
        defer_model_check=True,
    )


def post_process_plan(plan: str, event: EventData, symbol: str = "₹") -> str:
    """Normalize headings and prepend the summary header."""
    processed = _BARE_HEADING.sub(r"## \1", plan.strip())
    return plan_header(event, symbol) + processed


class PlanDrafter:
    """Drafting capability backed by a pydantic-ai agent."""

    def __init__(self, settings: Settings, factory: AgentFactory[None, str] | None = None):
        self.settings = settings
        self._factory = factory or AgentFactory(settings, settings.llm.drafting_model, _create_agent)

    @property
    def agent(self) -> Agent[None, str]:
        return self._factory.get_agent()

    async def draft(self, event: EventData, refinement_text: str | None = None) -> str:
        symbol = self.settings.planner.currency_symbol
        prompt = build_plan_prompt(event, refinement_text, symbol)

        logger.info("Calling LLM for plan drafting...")
        result = await self.agent.run(
            prompt,
            model_settings={
                "temperature": self.settings.llm.drafting_temperature,
                "timeout": self.settings.llm.drafting_request_timeout_seconds,
            },
        )

        plan = (result.output or "").strip()
        if not plan:
            raise ValueError("Generated plan is empty")

        logger.info(f"Plan drafted ({len(plan)} chars)")
        return post_process_plan(plan, event, symbol)
