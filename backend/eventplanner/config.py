"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eventplanner.llm_providers import OpenAIModel, get_model_string

logger = logging.getLogger(__name__)


class PlannerConfig(BaseModel):
    """Input bounds and event limits enforced by the pipeline."""

    min_input_length: int = 10
    max_input_length: int = 1000
    min_refinement_length: int = 5
    max_attendees: int = 1000
    min_budget: int = 10000  # Floor for the whole event, in currency units
    default_event_duration: int = 8  # Hours
    max_duration_hours: int = 12
    max_tags: int = 10
    max_years_ahead: int = 2
    currency_symbol: str = "₹"
    enable_fallback_parsing: bool = True


class LLMConfig(BaseModel):
    """Models and call bounds for the extraction and drafting agents."""

    extraction_model: str = get_model_string(OpenAIModel.GPT_4_1_MINI)
    drafting_model: str = get_model_string(OpenAIModel.GPT_4_1_MINI)
    extraction_temperature: float = 0.1
    drafting_temperature: float = 0.7

    # Stage-level bounds; the per-request bounds are shorter so the
    # extractor still has time for its pattern-based fallback.
    extraction_timeout_seconds: float = 30.0
    extraction_request_timeout_seconds: float = 25.0
    drafting_timeout_seconds: float = 45.0
    drafting_request_timeout_seconds: float = 40.0


class VenueSearchConfig(BaseModel):
    """Venue lookup parameters."""

    enabled: bool = True
    timeout_seconds: float = 20.0
    max_results: int = 5
    include_domains: list[str] = Field(
        default_factory=lambda: [
            "marriott.com",
            "hyatt.com",
            "itchotels.com",
            "theleela.com",
            "oberoi.com",
            "tajhotels.com",
            "radisson.com",
            "novotel.com",
        ]
    )


class CacheConfig(BaseModel):
    """Result cache sizing and expiry."""

    enabled: bool = True
    expiry_minutes: int = 60
    max_size: int = 1000
    sweep_interval_minutes: int = 5


class ServerConfig(BaseModel):
    """HTTP server options."""

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:3001"]
    )


class Settings(BaseSettings):
    """Main configuration class."""

    # Paths
    data_dir: Path = Path("data")
    environment: str = "development"

    # API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    groq_api_key: str = ""
    exa_api_key: str = ""
    logfire_token: str = ""

    # Nested configuration sections
    planner: PlannerConfig = Field(default_factory=PlannerConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    venue_search: VenueSearchConfig = Field(default_factory=VenueSearchConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("data_dir", mode="after")
    @classmethod
    def resolve_data_dir(cls, v: Path) -> Path:
        """Resolve data directory to absolute path."""
        return v.resolve()

    def load_yaml_config(self) -> None:
        """Load and merge YAML configuration."""
        config_path = self.data_dir / "config.yaml"

        if not config_path.exists():
            logger.warning(
                f"Config file not found: {config_path}. "
                "Using defaults. Run 'python -m eventplanner init' to create it."
            )
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            for section_name in ["planner", "llm", "venue_search", "cache", "server"]:
                if section_name in yaml_config:
                    section = getattr(self, section_name)
                    section_dict = section.model_dump()
                    section_dict.update(yaml_config[section_name] or {})
                    setattr(self, section_name, section.__class__(**section_dict))

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    settings = Settings()
    settings.load_yaml_config()
    return settings
