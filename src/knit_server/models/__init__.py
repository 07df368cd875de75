# src/knit_server/models/__init__.py
"""SQLAlchemy models for the Knit application."""

from .comment import Comment
from .community import Community, CommunityMember
from .connection import Connection
from .event import Event, EventAttendee
from .post import Post, PostLike
from .profile import Profile

__all__ = [
    "Comment",
    "Community", "CommunityMember",
    "Connection",
    "Event", "EventAttendee",
    "Post", "PostLike",
    "Profile",
]
