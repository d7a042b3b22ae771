"""LLM Provider and Model Enums for easy model selection and hotswapping.

Model identifiers here are turned into pydantic-ai model strings, so the
extraction and drafting agents can be pointed at another provider from
config without code changes.
"""

from enum import StrEnum


class LLMProvider(StrEnum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GROQ = "groq"


class OpenAIModel(StrEnum):
    """OpenAI models available via API."""

    GPT_5 = "gpt-5"
    GPT_5_MINI = "gpt-5-mini"
    GPT_4_1 = "gpt-4.1"
    GPT_4_1_MINI = "gpt-4.1-mini"


class AnthropicModel(StrEnum):
    """Anthropic Claude models available via API."""

    CLAUDE_SONNET_4_5 = "claude-sonnet-4-5"
    CLAUDE_HAIKU_4_5 = "claude-haiku-4-5"


class GroqModel(StrEnum):
    """Groq-hosted open models."""

    LLAMA_3_3_70B_VERSATILE = "llama-3.3-70b-versatile"
    LLAMA_3_1_8B_INSTANT = "llama-3.1-8b-instant"


# =============================================================================
# Helper Functions
# =============================================================================


def get_model_string(model: OpenAIModel | AnthropicModel | GroqModel) -> str:
    """Get the pydantic-ai model string for any supported model."""
    return f"{get_provider_for_model(model)}:{model.value}"


def get_provider_for_model(
    model: OpenAIModel | AnthropicModel | GroqModel,
) -> LLMProvider:
    """Determine the provider for a given model."""
    if isinstance(model, OpenAIModel):
        return LLMProvider.OPENAI
    elif isinstance(model, AnthropicModel):
        return LLMProvider.ANTHROPIC
    elif isinstance(model, GroqModel):
        return LLMProvider.GROQ
    else:
        raise ValueError(f"Unknown model type: {type(model)}")


def get_provider_for_model_string(model_string: str) -> LLMProvider | None:
    """Parse the provider prefix of a 'provider:model' string."""
    prefix = model_string.split(":", 1)[0]
    try:
        return LLMProvider(prefix)
    except ValueError:
        return None
