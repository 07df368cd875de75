"""Lifecycle classification for events.

The status is recomputed from wall-clock time on every read and never stored.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum

from knit_server.db.time import as_utc, utcnow

STARTING_SOON_WINDOW = timedelta(minutes=30)


class EventStatus(StrEnum):
    """Where an event sits on the timeline relative to now."""

    LIVE = "live"
    STARTING_SOON = "starting_soon"
    UPCOMING = "upcoming"
    ENDED = "ended"


def derive_event_status(
    start: datetime,
    end: datetime,
    now: datetime | None = None,
    *,
    soon_window: timedelta = STARTING_SOON_WINDOW,
) -> EventStatus:
    """Classify an event by its start/end timestamps.

    Args:
        start: When the event begins.
        end: When the event finishes.
        now: Reference time; defaults to the current UTC time.
        soon_window: How close the start must be to count as starting soon.
            The comparison is strict, so a start exactly one window away is
            still upcoming.

    Returns:
        ``LIVE`` when start <= now <= end, ``STARTING_SOON`` or ``UPCOMING``
        before the start, ``ENDED`` afterwards. Rows whose end precedes their
        start are always ``ENDED``.
    """
    start = as_utc(start)
    end = as_utc(end)
    now = utcnow() if now is None else as_utc(now)

    if end < start:
        return EventStatus.ENDED
    if start <= now <= end:
        return EventStatus.LIVE
    if now < start:
        if start - now < soon_window:
            return EventStatus.STARTING_SOON
        return EventStatus.UPCOMING
    return EventStatus.ENDED
