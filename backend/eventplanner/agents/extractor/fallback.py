"""Pattern-based extraction used when the extraction model is unavailable."""

import logging
import re
from datetime import date, timedelta

from eventplanner.agents.extractor.models import ExtractedEvent

logger = logging.getLogger(__name__)

_ATTENDEES = re.compile(
    r"(\d+)\s*(?:people|persons|attendees|participants|employees|executives|members|guests)",
    re.IGNORECASE,
)

# (pattern, multiplier) pairs tried in order.
_BUDGET_PATTERNS: list[tuple[re.Pattern, int]] = [
    (re.compile(r"₹?\s*(\d+(?:\.\d+)?)\s*(?:lakhs?|lacs?|l)\b", re.IGNORECASE), 100000),
    (re.compile(r"₹\s*(\d[\d,]*)"), 1),
    (re.compile(r"budget\D{0,20}?(\d[\d,]*)", re.IGNORECASE), 1),
]

_LOCATION_PATTERNS = [
    re.compile(
        r"\bin\s+([A-Za-z][A-Za-z\s]*?)(?:\s+on\b|\s+tomorrow|\s+next|\s+budget|\s+for\b|\s*[.,]|$)",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:\bat|@)\s+([A-Za-z][A-Za-z\s]*?)(?:\s+on\b|\s+tomorrow|\s+next|\s+budget|\s+for\b|\s*[.,]|$)",
        re.IGNORECASE,
    ),
]

_EVENT_TYPES: list[tuple[str, re.Pattern]] = [
    ("training", re.compile(r"training|skill|learn", re.IGNORECASE)),
    ("conference", re.compile(r"conference|convention", re.IGNORECASE)),
    ("offsite", re.compile(r"offsite|off-site|retreat|outing", re.IGNORECASE)),
    ("seminar", re.compile(r"seminar|session", re.IGNORECASE)),
    ("workshop", re.compile(r"workshop", re.IGNORECASE)),
    ("meeting", re.compile(r"meeting|discussion", re.IGNORECASE)),
]

_REQUIREMENTS: list[tuple[str, re.Pattern]] = [
    ("vegetarian", re.compile(r"vegetarian|\bveg\b", re.IGNORECASE)),
    ("premium", re.compile(r"premium|luxury|high-end", re.IGNORECASE)),
    ("outdoor", re.compile(r"outdoor|beach|garden", re.IGNORECASE)),
    ("basic", re.compile(r"\bbasic\b", re.IGNORECASE)),
]

_ISO_DATE = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")
_HALF_DAY = re.compile(r"half[\s-]day", re.IGNORECASE)
_HOURS = re.compile(r"(\d+)\s*(?:hours?|hrs?)\b", re.IGNORECASE)


def _parse_budget(text: str) -> int | None:
    for pattern, multiplier in _BUDGET_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        try:
            amount = float(match.group(1).replace(",", "")) * multiplier
        except ValueError:
            continue
        logger.info(f"Parsed budget {amount:,.0f} from '{match.group(0).strip()}'")
        return int(amount)
    return None


def _parse_location(text: str) -> str | None:
    for pattern in _LOCATION_PATTERNS:
        match = pattern.search(text)
        if match:
            location = match.group(1).strip()
            if len(location) >= 2:
                return location
    return None


def _parse_date(text: str, today: date) -> str | None:
    match = _ISO_DATE.search(text)
    if match:
        return match.group(1)
    lowered = text.lower()
    if "tomorrow" in lowered:
        return (today + timedelta(days=1)).isoformat()
    if "next week" in lowered:
        return (today + timedelta(days=7)).isoformat()
    return None


def _parse_duration(text: str) -> int | None:
    if _HALF_DAY.search(text):
        return 4
    match = _HOURS.search(text)
    if match:
        return int(match.group(1))
    return None


def fallback_parse(text: str, today: date) -> ExtractedEvent | None:
    """Extract what regular expressions can find.

    Returns None when the text yields no event signal at all, so the caller
    can report that the request was not understood.
    """
    logger.info("Attempting fallback pattern-based extraction...")

    attendees = _ATTENDEES.search(text)
    event_type = next((name for name, p in _EVENT_TYPES if p.search(text)), None)

    extracted = ExtractedEvent(
        event_type=event_type,
        attendee_count=int(attendees.group(1)) if attendees else None,
        location=_parse_location(text),
        date=_parse_date(text, today),
        budget=_parse_budget(text),
        duration_hours=_parse_duration(text),
        requirements=[name for name, p in _REQUIREMENTS if p.search(text)],
    )

    if not any([extracted.event_type, extracted.attendee_count, extracted.budget, extracted.location]):
        logger.warning("Fallback extraction found no event details")
        return None

    logger.info(f"Fallback extraction completed: {extracted.model_dump(exclude_none=True)}")
    return extracted
