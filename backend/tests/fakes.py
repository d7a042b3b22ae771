"""In-memory capabilities and sample data shared by the tests."""

import asyncio
from datetime import date

from eventplanner.pipeline.capabilities import SearchHit
from eventplanner.pipeline.plan_template import COST_HEADER, ITINERARY_HEADER
from eventplanner.pipeline.state import EventData

TODAY = date(2026, 1, 15)

BANGALORE_REQUEST = (
    "Corporate training for 50 people in Bangalore on 2026-06-10. Budget ₹1.5 lakhs."
)

BANGALORE_EVENT = EventData(
    event_type="training",
    attendee_count=50,
    location="Bangalore",
    date="2026-06-10",
    budget=150000,
    duration_hours=8,
)

SAMPLE_PLAN = (
    "# TRAINING EVENT PLAN\n\n"
    "## EVENT BRIEF\nA focused one-day training.\n\n"
    f"{ITINERARY_HEADER}\n09:00 - Registration\n10:00 - Session 1\n\n"
    f"{COST_HEADER}\nVenue Rental: ₹37,500\nCatering: ₹40,000\n"
)

BANGALORE_HITS = [
    SearchHit(
        title="ITC Gardenia - Conference Halls | Bangalore",
        url="https://www.itchotels.com/in/itcgardenia/",
        content="Conference halls in Bangalore with catering, parking and Wi-Fi.",
        score=0.9,
    ),
    SearchHit(
        title="The Leela Palace Bangalore - Meeting Venue",
        url="https://www.theleela.com/bangalore/",
        content="Banquet and meeting spaces with A/V equipment in Bangalore.",
        score=0.8,
    ),
    SearchHit(
        title="Top 10 venues in Bangalore - Blog",
        url="https://example.com/blog/venues",
        content="Our favourite event venue picks.",
        score=0.5,
    ),
]


class FakeExtraction:
    def __init__(self, result=BANGALORE_EVENT, error: Exception | None = None, delay: float = 0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls: list[str] = []

    async def extract(self, text):
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


class FakeDrafting:
    def __init__(self, plan: str = SAMPLE_PLAN, error: Exception | None = None, delay: float = 0):
        self.plan = plan
        self.error = error
        self.delay = delay
        self.calls: list[tuple[EventData, str | None]] = []

    async def draft(self, event, refinement_text=None):
        self.calls.append((event, refinement_text))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.plan


class FakeLookup:
    def __init__(self, hits=None, error: Exception | None = None, delay: float = 0):
        self.hits = BANGALORE_HITS if hits is None else hits
        self.error = error
        self.delay = delay
        self.queries: list[str] = []

    async def search(self, query, include_domains):
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.hits)
