"""Narrow interfaces to the external services a stage may call.

Stages only see these protocols. Concrete implementations backed by
pydantic-ai agents and the Exa search API are assembled by
``build_capabilities``; tests pass in-memory fakes instead.
"""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import BaseModel

from eventplanner.config import Settings
from eventplanner.pipeline.exceptions import CapabilityError, CapabilityTimeoutError
from eventplanner.pipeline.state import EventData

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SearchHit(BaseModel):
    """One raw result returned by a lookup."""

    title: str | None = None
    url: str | None = None
    content: str | None = None
    score: float | None = None


class Extraction(Protocol):
    async def extract(self, text: str) -> EventData | None:
        """Turn free text into event fields, or None when nothing usable was found."""
        ...


class Drafting(Protocol):
    async def draft(self, event: EventData, refinement_text: str | None = None) -> str:
        """Produce the long-form plan text for an event."""
        ...


class Lookup(Protocol):
    async def search(self, query: str, include_domains: Sequence[str]) -> list[SearchHit]:
        """Search the web, restricted to the given domains."""
        ...


@dataclass
class Capabilities:
    """The set of external collaborators a planner run uses."""

    extraction: Extraction
    drafting: Drafting
    lookup: Lookup | None = None


async def call_capability(name: str, call: Awaitable[T], timeout_seconds: float) -> T:
    """Await a capability call once, bounded by a timeout.

    Raises:
        CapabilityTimeoutError: The call did not finish in time.
        CapabilityError: The call raised.
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        raise CapabilityTimeoutError(
            f"{name} timeout after {timeout_seconds:g}s", capability=name
        ) from e
    except CapabilityError:
        raise
    except Exception as e:
        raise CapabilityError(f"{name} API error: {e}", capability=name) from e


def build_capabilities(settings: Settings, today=None) -> Capabilities:
    """Assemble the production capabilities from settings."""
    from eventplanner.agents.drafter import PlanDrafter
    from eventplanner.agents.extractor import EventExtractor
    from eventplanner.services.exa import ExaLookup

    lookup = None
    if settings.venue_search.enabled and settings.exa_api_key:
        lookup = ExaLookup(api_key=settings.exa_api_key, max_results=settings.venue_search.max_results)
    else:
        logger.warning("Exa API key not set - venue search will use fallback venues")

    return Capabilities(
        extraction=EventExtractor(settings, today=today),
        drafting=PlanDrafter(settings),
        lookup=lookup,
    )
