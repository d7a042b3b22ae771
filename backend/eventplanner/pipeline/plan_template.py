"""Plan text helpers: header, refinement notice and the offline template."""

from eventplanner.pipeline.state import EventData

ITINERARY_HEADER = "## DETAILED ITINERARY"
COST_HEADER = "## COST BREAKDOWN"

# Share of the total budget per cost line in the offline plan.
BUDGET_SPLITS: tuple[tuple[str, float], ...] = (
    ("Venue Rental", 0.30),
    ("Catering", 0.40),
    ("Equipment", 0.15),
    ("Materials", 0.10),
    ("Miscellaneous", 0.05),
)

_ITINERARY = (
    ("09:00 AM", "Registration & Welcome"),
    ("09:30 AM", "Opening Session"),
    ("10:30 AM", "Main Session 1"),
    ("11:30 AM", "Networking Break"),
    ("12:00 PM", "Main Session 2"),
    ("01:00 PM", "Lunch Break"),
    ("02:00 PM", "Interactive Session"),
    ("03:30 PM", "Group Activities"),
    ("04:30 PM", "Closing Remarks"),
    ("05:00 PM", "Event Conclusion"),
)


def format_currency(amount: int, symbol: str = "₹") -> str:
    return f"{symbol}{amount:,}"


def plan_header(event: EventData, symbol: str = "₹") -> str:
    """Title block placed at the top of every plan."""
    return (
        f"# {event.event_type.upper()} EVENT PLAN\n"
        f"**{event.attendee_count} people • {event.location} • {event.date}**\n"
        f"**Budget: {format_currency(event.budget, symbol)}**\n\n"
    )


def add_refinement_notice(plan: str, refinement_text: str) -> str:
    """Insert a notice describing the refinement before the itinerary section."""
    notice = (
        "\n## 🔧 REFINEMENTS APPLIED\n"
        f"**User Request**: {refinement_text}\n"
        "*The plan below has been adjusted to incorporate your requested changes.*\n\n"
    )
    index = plan.find(ITINERARY_HEADER)
    if index == -1:
        return notice + plan
    return plan[:index] + notice + plan[index:]


def build_fallback_plan(event: EventData, symbol: str = "₹") -> str:
    """Deterministic plan built from budget arithmetic and a canned itinerary."""
    itinerary = "\n".join(f"{time} - {activity}" for time, activity in _ITINERARY)
    costs = "\n".join(
        f"{label}: {format_currency(int(event.budget * share), symbol)}"
        for label, share in BUDGET_SPLITS
    )

    return (
        plan_header(event, symbol)
        + "## EVENT BRIEF\n"
        f"A professional {event.event_type} for {event.attendee_count} participants in "
        f"{event.location}, designed to achieve key business objectives within the "
        "allocated budget.\n\n"
        f"{ITINERARY_HEADER}\n{itinerary}\n\n"
        f"{COST_HEADER}\n{costs}\n"
        f"Total: {format_currency(event.budget, symbol)}\n\n"
        "## MEAL PLAN\n"
        "Breakfast: Tea, coffee, sandwiches, fruits\n"
        "Lunch: Regional cuisine with vegetarian and non-vegetarian options\n"
        "Snacks: Evening refreshments\n\n"
        "## LOGISTICS\n"
        "Basic venue setup with necessary A/V equipment and professional catering "
        f"services suitable for {event.attendee_count} attendees.\n\n"
        "*Note: This is a basic plan. For detailed customization, please try again "
        "or contact support.*"
    )
