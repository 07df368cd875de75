"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse
from .community import CommunityPage, CommunityResponse, MembershipState
from .connection import ConnectionCreate, ConnectionResponse
from .event import EventCreate, EventResponse, RsvpRequest, RsvpState
from .post import LikeState, PostCreate, PostResponse
from .profile import AuthorSummary, ProfileResponse, ProfileUpdate
from .search import DashboardResponse, SearchResponse

__all__ = [
    "CommentCreate", "CommentResponse",
    "CommunityPage", "CommunityResponse", "MembershipState",
    "ConnectionCreate", "ConnectionResponse",
    "EventCreate", "EventResponse", "RsvpRequest", "RsvpState",
    "LikeState", "PostCreate", "PostResponse",
    "AuthorSummary", "ProfileResponse", "ProfileUpdate",
    "DashboardResponse", "SearchResponse",
]
