"""Event-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .comment import CommentResponse
from .profile import AuthorSummary

EventType = Literal["workshop", "meetup", "mentoring_session", "discussion", "other"]
RsvpStatus = Literal["attending", "maybe", "not_attending"]
EventStatusName = Literal["live", "starting_soon", "upcoming", "ended"]


class EventCreate(BaseModel):
    """Schema for scheduling a new event."""

    title: str = Field(..., max_length=300)
    description: str = Field("", max_length=10000)
    event_type: EventType = "other"
    location: str = Field("", max_length=300)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    start_time: datetime
    end_time: datetime
    max_attendees: int | None = Field(None, ge=1)
    is_online: bool = False
    meeting_link: str | None = None
    tags: list[str] = Field(default_factory=list)
    community_id: str | None = None

    @field_validator("title")
    @classmethod
    def require_title(cls, v: str) -> str:
        """Reject blank titles."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def check_schedule(self) -> "EventCreate":
        """Ensure the event does not end before it starts."""
        if self.end_time < self.start_time:
            raise ValueError("end_time must not precede start_time")
        return self


class EventResponse(BaseModel):
    """Schema for event information returned by the API."""

    id: str
    title: str
    description: str
    organizer_id: str
    event_type: EventType
    location: str
    latitude: float
    longitude: float
    start_time: datetime
    end_time: datetime
    max_attendees: int | None
    attendee_count: int = 0
    is_online: bool
    meeting_link: str | None
    tags: list[str]
    community_id: str | None
    status: EventStatusName
    organizer: AuthorSummary | None = None
    user_rsvp_status: RsvpStatus | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RsvpRequest(BaseModel):
    """Attendance intention submitted by a member."""

    status: RsvpStatus = "attending"


class RsvpState(BaseModel):
    """Authoritative RSVP outcome with the recounted attendance."""

    event_id: str
    user_id: str
    status: RsvpStatus
    attendee_count: int


class EventPage(BaseModel):
    """An event together with its discussion."""

    event: EventResponse
    comments: list[CommentResponse]


class EventMarker(BaseModel):
    """Map marker for an event, plotted by literal coordinates."""

    id: str
    title: str
    event_type: EventType
    latitude: float
    longitude: float
    status: EventStatusName
    attendee_count: int


class MapTiles(BaseModel):
    """Raster tile source the client should render underneath the markers."""

    url_template: str
    attribution: str
    center: tuple[float, float]
    zoom: int


class MapResponse(BaseModel):
    """Map page payload: tile configuration plus filtered markers."""

    tiles: MapTiles
    markers: list[EventMarker]
    events: list[EventResponse]
