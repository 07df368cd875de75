# src/knit_server/db/__init__.py
"""Database configuration and utilities."""

from .session import Base, build_session_factory, get_db

__all__ = ["Base", "build_session_factory", "get_db"]
