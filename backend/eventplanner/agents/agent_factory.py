"""Generic agent factory for lazily building pydantic-ai agents."""

import logging
import os
from typing import Callable, Generic, TypeVar

from pydantic_ai import Agent

from eventplanner.config import Settings
from eventplanner.llm_providers import LLMProvider, get_provider_for_model_string

logger = logging.getLogger(__name__)

DepsT = TypeVar("DepsT")
OutputT = TypeVar("OutputT")

_PROVIDER_ENV_VARS: dict[LLMProvider, tuple[str, str]] = {
    LLMProvider.OPENAI: ("OPENAI_API_KEY", "openai_api_key"),
    LLMProvider.ANTHROPIC: ("ANTHROPIC_API_KEY", "anthropic_api_key"),
    LLMProvider.GROQ: ("GROQ_API_KEY", "groq_api_key"),
}


class AgentFactory(Generic[DepsT, OutputT]):
    """Builds an agent on first use and hands out the same instance afterwards."""

    def __init__(
        self,
        settings: Settings,
        model: str,
        create_fn: Callable[[str], Agent[DepsT, OutputT]],
    ):
        """Initialize the agent factory.

        Args:
            settings: Settings holding provider API keys
            model: pydantic-ai model string, e.g. 'openai:gpt-5-mini'
            create_fn: Function that creates a new agent for the model string
        """
        self._settings = settings
        self._model = model
        self._create_fn = create_fn
        self._agent: Agent[DepsT, OutputT] | None = None

    def get_agent(self) -> Agent[DepsT, OutputT]:
        """Get or create the agent instance."""
        if self._agent is None:
            self._setup_api_keys()
            self._agent = self._create_fn(self._model)
            logger.debug(f"Created agent for model {self._model}")
        return self._agent

    def _setup_api_keys(self) -> None:
        """Export the configured key for the model's provider, if set."""
        provider = get_provider_for_model_string(self._model)
        if provider not in _PROVIDER_ENV_VARS:
            return
        env_var, setting_name = _PROVIDER_ENV_VARS[provider]
        value = getattr(self._settings, setting_name)
        if value:
            os.environ[env_var] = value
