"""VenueSearch stage: shortlist venues, falling back to a static catalog."""

import logging
import re
from collections.abc import Sequence
from datetime import datetime, timezone

from eventplanner.config import Settings
from eventplanner.pipeline.capabilities import Lookup, SearchHit, call_capability
from eventplanner.pipeline.exceptions import CapabilityError
from eventplanner.pipeline.stages.base import BaseStage
from eventplanner.pipeline.state import (
    EventData,
    PipelineState,
    SearchCriteria,
    Stage,
    Venue,
    VenueMeta,
)
from eventplanner.pipeline.venue_catalog import estimate_cost_range, fallback_venues

logger = logging.getLogger(__name__)

MAX_VENUES = 5
MAX_NAME_CHARS = 100
MAX_DESCRIPTION_CHARS = 200
MAX_SNIPPET_CHARS = 150
DEFAULT_DESCRIPTION = "Professional venue with event facilities"

EXCLUDE_TERMS = (
    "blog", "article", "news", "review", "wikipedia",
    "facebook", "twitter", "youtube", "instagram", "linkedin",
)
INCLUDE_TERMS = (
    "hotel", "resort", "conference", "banquet", "hall", "venue", "meeting",
    "event", "center", "centre", "marriott", "hyatt", "leela", "oberoi", "taj", "itc",
)

# Venue tags added when the refinement mentions any keyword.
REFINEMENT_VENUE_TAGS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("outdoor", "garden"), ("outdoor", "garden")),
    (("premium", "luxury"), ("premium", "luxury")),
    (("technology", "tech"), ("advanced a/v", "tech facilities")),
    (("beach", "resort"), ("beach", "resort")),
    (("traditional", "cultural"), ("traditional", "cultural venue")),
)

FEATURE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Parking", ("parking",)),
    ("Catering", ("catering", "banquet", "dining")),
    ("Wi-Fi", ("wifi", "wi-fi", "internet")),
    ("A/V equipment", ("a/v", "audio", "projector", "av equipment")),
    ("Accommodation", ("rooms", "suites", "accommodation")),
    ("Outdoor space", ("garden", "lawn", "terrace", "outdoor")),
    ("Pool", ("pool",)),
)

_NAME_CUT = re.compile(r"\s+[-–]\s+|\|")
_SPACES = re.compile(r"\s+")


def capacity_term(attendees: int) -> str:
    if attendees <= 20:
        return "small meeting rooms"
    if attendees <= 50:
        return "conference halls"
    if attendees <= 100:
        return "banquet halls"
    return "large convention centers"


def build_criteria(event: EventData, refinement_text: str | None) -> SearchCriteria:
    tags = list(event.tags)
    if refinement_text:
        text = refinement_text.lower()
        for keywords, venue_tags in REFINEMENT_VENUE_TAGS:
            if any(keyword in text for keyword in keywords):
                tags.extend(venue_tags)

    criteria = SearchCriteria(
        event_type=str(event.event_type),
        location=event.location,
        capacity=event.attendee_count,
        tags=tuple(dict.fromkeys(tags)),
    )
    return criteria.evolve(query=build_search_query(criteria))


def build_search_query(criteria: SearchCriteria) -> str:
    terms = [
        f"corporate {criteria.event_type} venues {criteria.location} {criteria.capacity} people",
        capacity_term(criteria.capacity),
    ]
    if "premium" in criteria.tags:
        terms.append("luxury")
    if "outdoor" in criteria.tags:
        terms.append("garden outdoor")
    if "beach" in criteria.tags:
        terms.append("beach resort")
    terms += ["A/V equipment", "catering", "parking"]
    return " ".join(terms)


def is_venue_result(hit: SearchHit) -> bool:
    if not hit.title or not hit.url:
        return False

    title = hit.title.lower()
    url = hit.url.lower()
    content = (hit.content or "").lower()

    if any(term in title or term in url for term in EXCLUDE_TERMS):
        return False
    return any(term in title or term in content for term in INCLUDE_TERMS)


def clean_venue_name(title: str) -> str:
    name = _NAME_CUT.split(title, maxsplit=1)[0]
    name = name.removesuffix("...").strip()
    return (name or title.strip())[:MAX_NAME_CHARS]


def clean_description(content: str | None) -> str:
    if not content:
        return DEFAULT_DESCRIPTION
    return _SPACES.sub(" ", content).strip()[:MAX_DESCRIPTION_CHARS] or DEFAULT_DESCRIPTION


def make_snippet(content: str | None) -> str | None:
    if not content:
        return None
    return content[:MAX_SNIPPET_CHARS] + "..."


def detect_features(content: str) -> tuple[str, ...]:
    text = content.lower()
    return tuple(
        feature for feature, keywords in FEATURE_KEYWORDS if any(k in text for k in keywords)
    )


def score_venue(hit: SearchHit, criteria: SearchCriteria) -> float:
    """Heuristic 0-100 fit of a search hit to the criteria."""
    text = f"{hit.title or ''} {hit.content or ''}".lower()
    score = 50.0
    if criteria.location.lower() in text:
        score += 15
    if criteria.event_type in text or "conference" in text or "meeting" in text:
        score += 10
    if capacity_term(criteria.capacity).split()[-1].rstrip("s") in text:
        score += 10
    score += min(15, 5 * sum(1 for tag in criteria.tags if tag in text))
    return min(100.0, score)


def process_results(
    hits: Sequence[SearchHit], criteria: SearchCriteria, event: EventData, symbol: str
) -> tuple[Venue, ...]:
    cost_range = estimate_cost_range(event, symbol)
    venues = [
        Venue(
            name=clean_venue_name(hit.title),
            url=hit.url,
            description=clean_description(hit.content),
            snippet=make_snippet(hit.content),
            suitability_score=score_venue(hit, criteria),
            cost_range=cost_range,
            features=detect_features(hit.content or ""),
        )
        for hit in hits
        if is_venue_result(hit)
    ]
    return tuple(venues[:MAX_VENUES])


class VenueSearchStage(BaseStage):
    stage = Stage.VENUE_SEARCH

    def __init__(self, lookup: Lookup | None, settings: Settings):
        self.lookup = lookup
        self.settings = settings

    async def execute(self, state: PipelineState) -> PipelineState:
        event = state.event_data
        if event is None:
            return state.fail("Invalid state: no event data for venue search")

        config = self.settings.venue_search
        symbol = self.settings.planner.currency_symbol
        criteria = build_criteria(event, state.user_input.refinement_text)

        if self.lookup is None or not config.enabled:
            return self._fallback(
                state, event, criteria, "Venue search is not configured; using fallback venue suggestions"
            )

        try:
            hits = await call_capability(
                "Venue lookup",
                self.lookup.search(criteria.query, config.include_domains),
                config.timeout_seconds,
            )
        except CapabilityError as e:
            logger.warning(f"Venue search failed: {e}")
            return self._fallback(
                state, event, criteria, f"Venue search failed ({e}); using fallback venue suggestions"
            )

        venues = process_results(hits or [], criteria, event, symbol)
        if not venues:
            return self._fallback(
                state, event, criteria, "Venue search found no suitable venues; using fallback venue suggestions"
            )

        meta = VenueMeta(
            searched_at=datetime.now(timezone.utc),
            criteria=criteria,
            total_results=len(hits),
            search_strategy="lookup",
        )
        logger.info(f"Found {len(venues)} venues for {event.location}")
        return state.evolve(
            venues=venues, venue_meta=meta, succeeded=True, next_stage=Stage.DONE
        )

    def _fallback(
        self,
        state: PipelineState,
        event: EventData,
        criteria: SearchCriteria,
        warning: str,
    ) -> PipelineState:
        venues, strategy = fallback_venues(event, self.settings.planner.currency_symbol)
        meta = VenueMeta(
            searched_at=datetime.now(timezone.utc),
            criteria=criteria,
            total_results=0,
            is_fallback=True,
            search_strategy=strategy,
        )
        return state.with_warnings(warning).evolve(
            venues=venues, venue_meta=meta, succeeded=True, next_stage=Stage.DONE
        )
