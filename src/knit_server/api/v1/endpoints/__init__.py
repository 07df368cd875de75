# src/knit_server/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .communities import router as communities_router
from .connections import router as connections_router
from .events import map_router
from .events import router as events_router
from .posts import comments_router
from .posts import router as posts_router
from .profiles import people_router, search_router
from .profiles import router as profiles_router

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
