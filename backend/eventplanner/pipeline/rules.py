"""Validation rules for structured event data.

Three layers, applied in order by the Validate stage:

1. ``check_schema`` - range and format checks. Any failure is fatal.
2. ``sanitize`` - trims and normalizes strings, clamps numbers, dedupes tags.
3. ``check_business_rules`` - advisories only. Nothing here blocks a run,
   including a per-attendee budget below the hard floor.

Raw request text is checked separately by ``check_raw_input`` before the
pipeline starts.
"""

import re
from datetime import date

from eventplanner.config import PlannerConfig
from eventplanner.pipeline.plan_template import format_currency
from eventplanner.pipeline.state import EventData, EventType

_UNSAFE_PATTERNS = [
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"eval\s*\(", re.IGNORECASE),
    re.compile(r"document\.", re.IGNORECASE),
    re.compile(r"window\.", re.IGNORECASE),
]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Per-attendee budget thresholds.
HARD_FLOOR_PER_ATTENDEE = 500
LOW_PER_ATTENDEE = 1000

# (min hours, max hours, optimal hours) per event type.
DURATION_WINDOWS: dict[str, tuple[int, int, int]] = {
    EventType.MEETING: (1, 4, 2),
    EventType.WORKSHOP: (2, 8, 4),
    EventType.TRAINING: (4, 16, 8),
    EventType.SEMINAR: (2, 8, 6),
    EventType.CONFERENCE: (8, 24, 12),
    EventType.OFFSITE: (8, 48, 16),
}

EXPENSIVE_CITIES = ("Mumbai", "Delhi", "Bangalore", "Hyderabad", "Pune", "Chennai")
MODERATE_CITIES = ("Ahmedabad", "Kolkata", "Surat", "Jaipur", "Lucknow")
SMALL_CITIES = ("Mysore", "Kochi", "Vadodara", "Nashik", "Rajkot")

WEEKDAY_EVENT_TYPES = (EventType.TRAINING, EventType.CONFERENCE, EventType.SEMINAR, EventType.MEETING)
WEEKEND_EVENT_TYPES = (EventType.OFFSITE, EventType.WORKSHOP)

LARGE_EVENT_ATTENDEES = 200


# =============================================================================
# Raw input
# =============================================================================


def check_raw_input(text: str | None, config: PlannerConfig, label: str = "input") -> list[str]:
    """Check request text before it enters the pipeline."""
    if not text or not isinstance(text, str) or not text.strip():
        return [f"Invalid {label}: must be a non-empty string"]

    errors = []
    stripped = text.strip()
    if len(stripped) < config.min_input_length:
        errors.append(
            f"Invalid {label}: must be at least {config.min_input_length} characters long"
        )
    if len(stripped) > config.max_input_length:
        errors.append(
            f"Invalid {label}: must not exceed {config.max_input_length} characters"
        )
    if contains_unsafe_markup(stripped):
        errors.append(f"Invalid {label}: contains potentially unsafe content")
    return errors


def check_refinement_text(text: str | None, config: PlannerConfig) -> list[str]:
    """Check refinement text supplied with a refine request."""
    if not text or not text.strip():
        return ["Invalid refinement: refinement text is required"]

    stripped = text.strip()
    errors = []
    if len(stripped) < config.min_refinement_length:
        errors.append(
            f"Invalid refinement: must be at least {config.min_refinement_length} characters long"
        )
    if len(stripped) > config.max_input_length:
        errors.append(
            f"Invalid refinement: must not exceed {config.max_input_length} characters"
        )
    if contains_unsafe_markup(stripped):
        errors.append("Invalid refinement: contains potentially unsafe content")
    return errors


def contains_unsafe_markup(text: str) -> bool:
    return any(pattern.search(text) for pattern in _UNSAFE_PATTERNS)


# =============================================================================
# Schema
# =============================================================================


def parse_event_date(value: str) -> date | None:
    if not _ISO_DATE.match(value or ""):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def check_schema(event: EventData, config: PlannerConfig, today: date) -> list[str]:
    """Range and format checks. Every message returned is fatal."""
    errors = []
    valid_types = [t.value for t in EventType]

    if event.event_type.strip().lower() not in valid_types:
        errors.append(f"Invalid event type: must be one of {', '.join(valid_types)}")

    if not 1 <= event.attendee_count <= config.max_attendees:
        errors.append(
            f"Invalid attendee count: must be between 1 and {config.max_attendees}"
        )

    if len(event.location.strip()) < 2:
        errors.append("Invalid location: must be a valid city name (at least 2 characters)")

    event_date = parse_event_date(event.date.strip())
    if event_date is None:
        errors.append("Invalid date: must be in YYYY-MM-DD format")
    elif event_date < today:
        errors.append("Invalid date: event date cannot be in the past")
    else:
        try:
            horizon = today.replace(year=today.year + config.max_years_ahead)
        except ValueError:
            # 29 February
            horizon = today.replace(year=today.year + config.max_years_ahead, day=28)
        if event_date > horizon:
            errors.append(
                f"Invalid date: event date cannot be more than {config.max_years_ahead} "
                "years in the future"
            )

    if event.budget < config.min_budget:
        errors.append(
            "Invalid budget: must be at least "
            f"{format_currency(config.min_budget, config.currency_symbol)}"
        )

    if not 1 <= event.duration_hours <= config.max_duration_hours:
        errors.append(
            f"Invalid duration: must be between 1 and {config.max_duration_hours} hours"
        )

    return errors


# =============================================================================
# Sanitization
# =============================================================================


def sanitize(event: EventData, config: PlannerConfig) -> EventData:
    """Normalize strings and clamp numbers. Assumes ``check_schema`` passed."""
    location = " ".join(word.capitalize() for word in event.location.strip().split())
    tags = tuple(dict.fromkeys(tag.strip().lower() for tag in event.tags if tag and tag.strip()))

    return event.evolve(
        event_type=EventType(event.event_type.strip().lower()),
        attendee_count=max(1, min(config.max_attendees, event.attendee_count)),
        location=location,
        date=event.date.strip(),
        budget=max(config.min_budget, event.budget),
        duration_hours=max(1, min(config.max_duration_hours, event.duration_hours)),
        tags=tags[: config.max_tags],
    )


# =============================================================================
# Business rules
# =============================================================================


def _budget_rules(event: EventData, symbol: str) -> list[str]:
    per_attendee = event.budget_per_attendee
    if per_attendee < HARD_FLOOR_PER_ATTENDEE:
        return [
            f"Budget per person ({format_currency(per_attendee, symbol)}) is below the "
            f"recommended minimum of {format_currency(HARD_FLOOR_PER_ATTENDEE, symbol)}; "
            "expect a very basic event"
        ]
    if per_attendee < LOW_PER_ATTENDEE:
        return [
            f"Budget per person ({format_currency(per_attendee, symbol)}) is quite low. "
            "Consider basic arrangements."
        ]
    return []


def _duration_rules(event: EventData) -> list[str]:
    window = DURATION_WINDOWS.get(event.event_type)
    if window is None:
        return []
    low, high, optimal = window
    hours = event.duration_hours
    if hours < low:
        return [f"{event.event_type.capitalize()} events typically need at least {low} hours"]
    if hours > high:
        return [f"{event.event_type.capitalize()} events rarely exceed {high} hours"]
    if abs(hours - optimal) > 2:
        return [
            f"Consider {optimal} hours for optimal {event.event_type} effectiveness "
            f"(currently {hours} hours)"
        ]
    return []


def _city_budget_rules(event: EventData, symbol: str) -> list[str]:
    per_attendee = event.budget_per_attendee
    if event.location in EXPENSIVE_CITIES and per_attendee < 1500:
        return [
            f"{event.location} is an expensive city. Budget of "
            f"{format_currency(per_attendee, symbol)} per person may be insufficient."
        ]
    if event.location in MODERATE_CITIES and per_attendee > 5000:
        return [
            f"Budget of {format_currency(per_attendee, symbol)} per person is generous "
            f"for {event.location}. Consider premium options."
        ]
    return []


def _requirement_rules(event: EventData) -> list[str]:
    per_attendee = event.budget_per_attendee
    tags = event.tags
    warnings = []

    if "premium" in tags and per_attendee < 2000:
        warnings.append("Premium requirements may not be feasible with the current budget")

    if "outdoor" in tags and event.event_type in (EventType.CONFERENCE, EventType.TRAINING):
        warnings.append(
            f"Outdoor setup for a {event.event_type} may need weather contingency planning"
        )

    if "technology" in tags and per_attendee < 1200:
        warnings.append("Technology-focused events may need a higher budget for equipment")

    if "guest speakers" in tags and per_attendee < 1000:
        warnings.append("Guest speaker fees may strain the current budget")

    return warnings


def _calendar_rules(event: EventData) -> list[str]:
    event_date = parse_event_date(event.date)
    if event_date is None:
        return []

    is_weekend = event_date.weekday() >= 5
    if is_weekend and event.event_type in WEEKDAY_EVENT_TYPES:
        return [
            f"{event.event_type.capitalize()} events are typically held on weekdays "
            "for better attendance"
        ]
    if not is_weekend and event.event_type in WEEKEND_EVENT_TYPES:
        return [
            f"{event.event_type.capitalize()} events often work better on weekends "
            "or Fridays"
        ]
    return []


def _attendance_rules(event: EventData) -> list[str]:
    warnings = []
    if event.location in SMALL_CITIES and event.attendee_count > 200:
        warnings.append(
            f"Large events ({event.attendee_count} people) may have limited venue "
            f"options in {event.location}"
        )
    if event.attendee_count > 500:
        warnings.append(
            f"Very large event ({event.attendee_count} people) requires advance "
            "planning and multiple vendors"
        )
    elif event.attendee_count > LARGE_EVENT_ATTENDEES:
        warnings.append("Large events may require special arrangements")
    return warnings


def check_business_rules(event: EventData, config: PlannerConfig) -> list[str]:
    """Advisory checks on sanitized data. Returns warnings, never errors."""
    symbol = config.currency_symbol
    return [
        *_budget_rules(event, symbol),
        *_duration_rules(event),
        *_city_budget_rules(event, symbol),
        *_requirement_rules(event),
        *_calendar_rules(event),
        *_attendance_rules(event),
    ]
