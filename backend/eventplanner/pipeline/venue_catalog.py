"""Offline venue suggestions used when the venue lookup is unavailable."""

from eventplanner.pipeline.state import EventData, Venue

CITY_VENUE_SCORE = 70.0
GENERIC_VENUE_SCORE = 50.0

CITY_VENUES: dict[str, tuple[tuple[str, str, str], ...]] = {
    "Mumbai": (
        (
            "ITC Grand Central - Conference Center",
            "https://www.itchotels.com/in/itcgrandcentral/",
            "Premium business hotel with state-of-the-art conference facilities in Parel, Mumbai.",
        ),
        (
            "The Leela Mumbai - Meeting Rooms",
            "https://www.theleela.com/mumbai/",
            "Luxury hotel offering sophisticated meeting spaces and professional event services.",
        ),
    ),
    "Bangalore": (
        (
            "ITC Gardenia - Conference Halls",
            "https://www.itchotels.com/in/itcgardenia/",
            "Business hotel with multiple conference rooms and modern A/V facilities in Bangalore.",
        ),
        (
            "The Leela Palace Bangalore",
            "https://www.theleela.com/bangalore/",
            "Premium venue with elegant meeting spaces and comprehensive business services.",
        ),
    ),
    "Delhi": (
        (
            "ITC Maurya - Convention Center",
            "https://www.itchotels.com/in/itcmaurya/",
            "Large-scale convention facilities with professional event management services.",
        ),
        (
            "The Leela Palace New Delhi",
            "https://www.theleela.com/newdelhi/",
            "Luxury hotel with sophisticated conference facilities in the heart of Delhi.",
        ),
    ),
    "Pune": (
        (
            "JW Marriott Pune - Meeting Spaces",
            "https://www.marriott.com/hotels/travel/pnqjw-jw-marriott-pune/",
            "Modern business hotel with flexible meeting rooms and event spaces.",
        ),
        (
            "Hyatt Regency Pune - Conference Center",
            "https://www.hyatt.com/en-US/hotel/india/hyatt-regency-pune/punpr",
            "Professional venue with comprehensive conference facilities and catering services.",
        ),
    ),
}


def estimate_cost_range(event: EventData, symbol: str = "₹") -> str:
    """Typical venue share of the budget, 25% to 35%."""
    low = int(event.budget * 0.25)
    high = int(event.budget * 0.35)
    return f"{symbol}{low:,} - {symbol}{high:,}"


def fallback_venues(event: EventData, symbol: str = "₹") -> tuple[tuple[Venue, ...], str]:
    """Return venues for the event's city and the strategy that produced them."""
    cost_range = estimate_cost_range(event, symbol)
    known = CITY_VENUES.get(event.location)
    if known:
        venues = tuple(
            Venue(
                name=name,
                url=url,
                description=description,
                suitability_score=CITY_VENUE_SCORE,
                cost_range=cost_range,
            )
            for name, url, description in known
        )
        return venues, "city_table"

    venues = (
        Venue(
            name=f"{event.location} Convention Center",
            url="#",
            description=(
                f"Local convention center with facilities for {event.attendee_count} "
                "attendees and professional event services."
            ),
            suitability_score=GENERIC_VENUE_SCORE,
            cost_range=cost_range,
        ),
        Venue(
            name=f"Business Hotel {event.location}",
            url="#",
            description=(
                "Professional business hotel with conference rooms suitable for "
                f"{event.event_type} events."
            ),
            suitability_score=GENERIC_VENUE_SCORE,
            cost_range=cost_range,
        ),
    )
    return venues, "generic"
