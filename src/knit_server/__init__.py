"""Knit: community and mentorship platform API."""

__version__ = "0.1.0"
