"""Exa search service integration."""

from .client import ExaClient
from .config import ExaConfig
from .exceptions import (
    ExaAPIError,
    ExaAuthError,
    ExaBadRequestError,
    ExaRateLimitError,
    ExaServerError,
)
from .lookup import ExaLookup
from .models import ExaSearchResponse, ExaSearchResult

__all__ = [
    "ExaClient",
    "ExaConfig",
    "ExaLookup",
    "ExaAPIError",
    "ExaAuthError",
    "ExaRateLimitError",
    "ExaBadRequestError",
    "ExaServerError",
    "ExaSearchResult",
    "ExaSearchResponse",
]
