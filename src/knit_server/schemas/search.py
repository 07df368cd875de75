"""Search and dashboard Pydantic schemas."""

from pydantic import BaseModel

from .community import CommunityResponse
from .connection import ConnectionResponse
from .event import EventResponse
from .profile import ProfileResponse


class SearchCounts(BaseModel):
    """Number of results each search tab would show."""

    all: int
    communities: int
    mentors: int
    mentees: int


class SearchResponse(BaseModel):
    """Combined community and people results."""

    query: str
    communities: list[CommunityResponse]
    people: list[ProfileResponse]
    counts: SearchCounts


class DashboardResponse(BaseModel):
    """Signed-in member's home view."""

    profile: ProfileResponse
    communities: list[CommunityResponse]
    connections: list[ConnectionResponse]
    events: list[EventResponse]
