# src/knit_server/services/__init__.py
"""Business logic services for the Knit application."""

from .event_status import EventStatus, derive_event_status
from .filtering import apply_filters, display_initials, filter_profiles
from .gateway import KnitGateway, SearchResults

__all__ = [
    "EventStatus",
    "derive_event_status",
    "apply_filters",
    "display_initials",
    "filter_profiles",
    "KnitGateway",
    "SearchResults",
]
