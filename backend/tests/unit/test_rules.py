"""
Unit Tests: Validation rules

Test cases:
- Raw input and refinement text checks
- Schema checks (every failure is an "Invalid ..." error)
- Sanitization (normalized strings, clamps, tag dedupe and cap)
- Business rules only ever produce warnings
"""

from datetime import date

import pytest

from eventplanner.config import PlannerConfig
from eventplanner.pipeline import rules
from eventplanner.pipeline.state import EventType
from tests.fakes import BANGALORE_EVENT, TODAY

CONFIG = PlannerConfig()


# =============================================================================
# Raw input
# =============================================================================


def test_short_input_is_rejected():
    assert rules.check_raw_input("hi!!!", CONFIG) == [
        "Invalid input: must be at least 10 characters long"
    ]


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_input_is_rejected(text):
    assert rules.check_raw_input(text, CONFIG) == ["Invalid input: must be a non-empty string"]


def test_long_input_is_rejected():
    errors = rules.check_raw_input("x" * 1001, CONFIG)
    assert errors == ["Invalid input: must not exceed 1000 characters"]


@pytest.mark.parametrize(
    "text",
    [
        "Meeting for 10 people <script>alert(1)</script>",
        "Meeting for 10 people javascript:void(0)",
        "Meeting <img onerror=alert(1)>",
        "Meeting for 10 document.cookie",
    ],
)
def test_unsafe_markup_is_rejected(text):
    assert "Invalid input: contains potentially unsafe content" in rules.check_raw_input(text, CONFIG)


def test_plain_request_passes():
    assert rules.check_raw_input("Corporate training for 50 people in Pune", CONFIG) == []


def test_refinement_text_checks():
    assert rules.check_refinement_text(None, CONFIG) == [
        "Invalid refinement: refinement text is required"
    ]
    assert rules.check_refinement_text("abc", CONFIG) == [
        "Invalid refinement: must be at least 5 characters long"
    ]
    assert rules.check_refinement_text("make it outdoor", CONFIG) == []


# =============================================================================
# Schema
# =============================================================================


def test_valid_event_has_no_schema_errors():
    assert rules.check_schema(BANGALORE_EVENT, CONFIG, TODAY) == []


@pytest.mark.parametrize(
    "changes,expected",
    [
        ({"event_type": "party"}, "Invalid event type"),
        ({"attendee_count": 0}, "Invalid attendee count"),
        ({"attendee_count": 1001}, "Invalid attendee count"),
        ({"location": "X"}, "Invalid location"),
        ({"date": "10/06/2026"}, "Invalid date: must be in YYYY-MM-DD format"),
        ({"date": "2026-02-30"}, "Invalid date: must be in YYYY-MM-DD format"),
        ({"date": "2025-12-31"}, "Invalid date: event date cannot be in the past"),
        ({"date": "2028-02-01"}, "Invalid date: event date cannot be more than 2 years"),
        ({"budget": 9999}, "Invalid budget: must be at least ₹10,000"),
        ({"duration_hours": 0}, "Invalid duration"),
        ({"duration_hours": 13}, "Invalid duration"),
    ],
)
def test_schema_errors(changes, expected):
    errors = rules.check_schema(BANGALORE_EVENT.evolve(**changes), CONFIG, TODAY)

    assert len(errors) == 1
    assert errors[0].startswith(expected)


def test_event_today_is_allowed():
    event = BANGALORE_EVENT.evolve(date=TODAY.isoformat())
    assert rules.check_schema(event, CONFIG, TODAY) == []


def test_leap_day_horizon():
    leap_day = date(2028, 2, 29)
    event = BANGALORE_EVENT.evolve(date="2030-02-28")
    assert rules.check_schema(event, CONFIG, leap_day) == []


# =============================================================================
# Sanitization
# =============================================================================


def test_sanitize_normalizes_fields():
    event = BANGALORE_EVENT.evolve(
        event_type=" Training ",
        location="  new   delhi ",
        tags=(" Premium", "premium", "", "Outdoor "),
    )

    sanitized = rules.sanitize(event, CONFIG)

    assert sanitized.event_type is EventType.TRAINING
    assert sanitized.location == "New Delhi"
    assert sanitized.tags == ("premium", "outdoor")


def test_sanitize_caps_tags():
    event = BANGALORE_EVENT.evolve(tags=tuple(f"tag{i}" for i in range(15)))
    assert len(rules.sanitize(event, CONFIG).tags) == CONFIG.max_tags


# =============================================================================
# Business rules
# =============================================================================


def _sanitized(**changes):
    return rules.sanitize(BANGALORE_EVENT.evolve(**changes), CONFIG)


def test_healthy_event_has_no_warnings():
    assert rules.check_business_rules(_sanitized(), CONFIG) == []


def test_per_attendee_below_floor_is_only_a_warning():
    warnings = rules.check_business_rules(_sanitized(attendee_count=100, budget=40000), CONFIG)

    assert any("below the recommended minimum of ₹500" in w for w in warnings)


def test_low_per_attendee_budget():
    warnings = rules.check_business_rules(_sanitized(attendee_count=20, budget=16000), CONFIG)
    assert any("quite low" in w for w in warnings)


def test_duration_outside_window():
    warnings = rules.check_business_rules(_sanitized(event_type="meeting", duration_hours=8), CONFIG)
    assert "Meeting events rarely exceed 4 hours" in warnings


def test_duration_far_from_optimal():
    warnings = rules.check_business_rules(_sanitized(duration_hours=4), CONFIG)
    assert "Consider 8 hours for optimal training effectiveness (currently 4 hours)" in warnings


def test_expensive_city_budget():
    warnings = rules.check_business_rules(_sanitized(budget=60000), CONFIG)
    assert any(w.startswith("Bangalore is an expensive city") for w in warnings)


def test_requirement_feasibility():
    warnings = rules.check_business_rules(
        _sanitized(tags=("premium", "outdoor", "technology", "guest speakers"), budget=45000),
        CONFIG,
    )

    assert "Premium requirements may not be feasible with the current budget" in warnings
    assert "Outdoor setup for a training may need weather contingency planning" in warnings
    assert "Technology-focused events may need a higher budget for equipment" in warnings
    assert "Guest speaker fees may strain the current budget" in warnings


def test_weekend_training_warning():
    # 2026-06-13 is a Saturday
    warnings = rules.check_business_rules(_sanitized(date="2026-06-13"), CONFIG)
    assert "Training events are typically held on weekdays for better attendance" in warnings


def test_weekday_offsite_warning():
    warnings = rules.check_business_rules(
        _sanitized(event_type="offsite", duration_hours=12), CONFIG
    )
    assert "Offsite events often work better on weekends or Fridays" in warnings


def test_attendance_warnings():
    large = rules.check_business_rules(_sanitized(attendee_count=300, budget=900000), CONFIG)
    assert "Large events may require special arrangements" in large

    very_large = rules.check_business_rules(_sanitized(attendee_count=600, budget=1800000), CONFIG)
    assert any(w.startswith("Very large event (600 people)") for w in very_large)

    small_city = rules.check_business_rules(
        _sanitized(location="mysore", attendee_count=250, budget=750000), CONFIG
    )
    assert any("limited venue options in Mysore" in w for w in small_city)
