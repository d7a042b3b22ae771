"""Configuration for the Exa search client."""

from pydantic import BaseModel


class ExaConfig(BaseModel):
    """Configuration for the Exa search client."""

    # A single attempt per call unless raised; the pipeline does not retry.
    max_retries: int = 1
    retry_backoff_seconds: float = 1.0

    # Search defaults
    num_results: int = 5
    search_type: str = "auto"
    max_characters: int = 1000
