# src/knit_server/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    comments_router,
    communities_router,
    connections_router,
    events_router,
    map_router,
    people_router,
    posts_router,
    profiles_router,
    search_router,
)

__all__ = [
    "communities_router",
    "comments_router",
    "connections_router",
    "events_router",
    "map_router",
    "people_router",
    "posts_router",
    "profiles_router",
    "search_router",
]
