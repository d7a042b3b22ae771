"""Pydantic models for the Extractor agent."""

from pydantic import BaseModel, Field


class ExtractedEvent(BaseModel):
    """Structured output requested from the extraction model."""

    is_event_request: bool = Field(
        default=True,
        description="False when the text does not describe an event to plan",
    )
    event_type: str | None = Field(
        default=None,
        description="One of: training, conference, offsite, seminar, workshop, meeting",
    )
    attendee_count: int | None = Field(default=None, description="Number of attendees")
    location: str | None = Field(default=None, description="City name only")
    date: str | None = Field(default=None, description="Event date as YYYY-MM-DD")
    budget: int | None = Field(default=None, description="Total budget in INR as an integer")
    duration_hours: int | None = Field(default=None, description="Event length in hours")
    requirements: list[str] = Field(
        default_factory=list,
        description="Short lower-case requirement keywords, e.g. vegetarian, premium, outdoor",
    )
