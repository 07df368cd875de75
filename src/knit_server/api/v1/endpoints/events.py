# src/knit_server/api/v1/endpoints/events.py
"""Event, RSVP and map endpoints for the Knit API."""

from __future__ import annotations

import asyncio
import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from knit_server.api.v1.dependencies import (
    CurrentUserDep,
    GatewayDep,
    OptionalUserDep,
    SettingsDep,
)
from knit_server.db.time import utcnow
from knit_server.errors import ConflictError, NotFoundError
from knit_server.schemas.comment import CommentCreate, CommentResponse
from knit_server.schemas.event import (
    EventCreate,
    EventMarker,
    EventPage,
    EventResponse,
    MapResponse,
    MapTiles,
    RsvpRequest,
    RsvpState,
)
from knit_server.services.filtering import filter_events

router = APIRouter(prefix="/events", tags=["events"])
map_router = APIRouter(prefix="/map", tags=["map"])
logger = logging.getLogger(__name__)

EventKind = Literal[
    "all",
    "live",
    "upcoming",
    "workshop",
    "meetup",
    "mentoring_session",
    "discussion",
    "other",
]


def _event_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Event not found",
    )


async def _filtered_events(
    gateway: GatewayDep,
    viewer_id: str | None,
    kind: str,
    q: str,
) -> list[EventResponse]:
    now = utcnow()
    events = await gateway.list_events(viewer_id, now=now)
    return filter_events(events, text=q, kind=kind, now=now)


@router.get("/", response_model=list[EventResponse])
async def list_events(
    gateway: GatewayDep,
    viewer: OptionalUserDep,
    kind: EventKind = Query("all", description="all, live, upcoming or an event type"),
    q: str = Query("", description="Match title, description, location or tags"),
) -> list[EventResponse]:
    """List events ordered by start time, optionally filtered."""
    return await _filtered_events(gateway, viewer.id if viewer else None, kind, q)


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> EventResponse:
    """Schedule a new event organized by the caller."""
    try:
        event = await gateway.create_event(current_user.id, event_data)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    logger.info("Event %s scheduled by %s", event.id, current_user.id)
    return event


@router.get("/{event_id}", response_model=EventPage)
async def get_event(
    event_id: str,
    gateway: GatewayDep,
    viewer: OptionalUserDep,
) -> EventPage:
    """Get an event with its discussion."""
    event, comments = await asyncio.gather(
        gateway.get_event(event_id, viewer.id if viewer else None),
        gateway.list_comments(event_id=event_id),
    )
    if event is None:
        raise _event_not_found()
    return EventPage(event=event, comments=comments)


@router.post("/{event_id}/rsvp", response_model=RsvpState)
async def rsvp_to_event(
    event_id: str,
    rsvp: RsvpRequest,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> RsvpState:
    """Record the caller's attendance intention.

    The response carries the recounted number of attendees.
    """
    try:
        return await gateway.rsvp_to_event(event_id, current_user.id, rsvp.status)
    except NotFoundError as exc:
        raise _event_not_found() from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.post(
    "/{event_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def comment_on_event(
    event_id: str,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> CommentResponse:
    """Add a comment to an event's discussion."""
    try:
        return await gateway.add_comment(
            author_id=current_user.id,
            content=comment_data.content,
            event_id=event_id,
        )
    except NotFoundError as exc:
        raise _event_not_found() from exc


@map_router.get("/", response_model=MapResponse)
async def get_map(
    gateway: GatewayDep,
    viewer: OptionalUserDep,
    app_settings: SettingsDep,
    kind: EventKind = Query("all"),
    q: str = Query(""),
) -> MapResponse:
    """Return the tile source and event markers for the map page."""
    events = await _filtered_events(gateway, viewer.id if viewer else None, kind, q)
    return MapResponse(
        tiles=MapTiles(
            url_template=app_settings.map_tile_url,
            attribution=app_settings.map_attribution,
            center=(app_settings.map_default_latitude, app_settings.map_default_longitude),
            zoom=app_settings.map_default_zoom,
        ),
        markers=[
            EventMarker(
                id=e.id,
                title=e.title,
                event_type=e.event_type,
                latitude=e.latitude,
                longitude=e.longitude,
                status=e.status,
                attendee_count=e.attendee_count,
            )
            for e in events
        ],
        events=events,
    )
