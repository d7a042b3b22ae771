"""System prompt and prompt builder for the Drafter agent."""

from eventplanner.pipeline.plan_template import COST_HEADER, ITINERARY_HEADER, format_currency
from eventplanner.pipeline.state import EventData

DRAFTER_SYSTEM_PROMPT = """You are an expert corporate event planner with 15+ years of experience in India.

You understand local business culture, regional cuisine and dietary requirements,
venue standards and pricing in major Indian cities, corporate training
methodologies and professional event logistics.

Create comprehensive, realistic and culturally appropriate event plans. Always:
- Use specific, actionable details
- Include cost breakdowns that sum to the stated budget
- Suggest India-based speakers and vendors when possible
- Consider local transportation and infrastructure
- Follow the section headings given in the request exactly, as markdown '##' headings
"""


def _time_slots(hours: int) -> str:
    start_hour = 9
    return "\n".join(
        f"{start_hour + i:02d}:00 - [Activity {i + 1}]" for i in range(hours)
    )


def _cost_structure(event: EventData, symbol: str) -> str:
    premium = "premium" in event.tags
    per_head_catering = 1200 if premium else 800
    lines = [
        f"Venue Rental: [{format_currency(int(event.budget * 0.25), symbol)}]",
        f"Catering ({event.attendee_count} people): "
        f"[{format_currency(event.attendee_count * per_head_catering, symbol)}]",
        f"A/V Equipment: [{format_currency(int(event.budget * 0.08), symbol)}]",
        f"Stationery & Materials: [{format_currency(event.attendee_count * 150, symbol)}]",
    ]
    if "transport" in event.tags or event.attendee_count > 30:
        lines.append(
            f"Transport: [{format_currency(-(-event.attendee_count // 20) * 1000, symbol)}]"
        )
    lines += [
        "Speaker Fees: [amount]",
        "Miscellaneous: [amount]",
        f"Total: [sum of all amounts = {format_currency(event.budget, symbol)}]",
    ]
    return "\n".join(lines)


def build_plan_prompt(event: EventData, refinement_text: str | None = None, symbol: str = "₹") -> str:
    """Build the drafting prompt for an event."""
    vegetarian = "vegetarian" in event.tags
    premium = "premium" in event.tags
    outdoor = any("outdoor" in tag for tag in event.tags)
    requirements = ", ".join(event.tags) or "None"

    prompt = f"""Generate a comprehensive corporate event plan for:

## Event Details

- Type: {event.event_type}
- Attendees: {event.attendee_count}
- Location: {event.location}
- Date: {event.date}
- Budget: {format_currency(event.budget, symbol)}
- Duration: {event.duration_hours} hours
- Special Requirements: {requirements}

## Required Format

## EVENT BRIEF
[2-3 sentences on the purpose, objectives and expected outcomes]

{ITINERARY_HEADER}
{_time_slots(event.duration_hours)}

{COST_HEADER}
{_cost_structure(event, symbol)}

## MEAL PLAN
Breakfast: [4-5 {"vegetarian items" if vegetarian else "items including vegetarian options"} suitable for {event.location}]
Lunch: [6-8 {"vegetarian items" if vegetarian else "vegetarian and non-vegetarian items"} with regional specialties]
Snacks: [3-4 items for {"afternoon and evening" if event.duration_hours > 6 else "break time"}]

## SPEAKER RECOMMENDATIONS
1. [Name/Professional Title] - [Expertise Area] - [City/Remote availability]

## LOGISTICS & SETUP
Transport: [Plan for {event.attendee_count} people in {event.location}]
Venue Setup: [Tables, chairs, A/V requirements, room layout]

## ENERGIZER ACTIVITIES
- [15-minute icebreaker relevant to a {event.event_type}]
- [Team exercise for {event.attendee_count} people]

## Constraints

- Make it realistic for {event.location} with local knowledge
- Stay within {format_currency(event.budget, symbol)}; all costs must add up
- {"Use premium vendors and high-end options" if premium else "Use cost-effective but quality options"}
- {"Include outdoor elements and weather contingencies" if outdoor else "Focus on an indoor professional setup"}
"""

    if refinement_text:
        prompt += f"""
## Refinement

The user asked for these changes to a previous plan: "{refinement_text}"
Apply them throughout the plan, especially the itinerary and activities.
"""

    return prompt
