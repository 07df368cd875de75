# src/knit_server/api/v1/endpoints/profiles.py
"""Profile, people directory and search endpoints."""

from __future__ import annotations

import asyncio
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from knit_server.api.v1.dependencies import CurrentUserDep, GatewayDep
from knit_server.errors import InvalidOperationError
from knit_server.schemas.profile import ProfileResponse, ProfileUpdate
from knit_server.schemas.search import DashboardResponse, SearchCounts, SearchResponse
from knit_server.services.filtering import (
    expand_roles,
    filter_profiles,
    filter_search_results,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])
people_router = APIRouter(prefix="/people", tags=["people"])
search_router = APIRouter(prefix="/search", tags=["search"])

SearchTab = Literal["all", "communities", "mentors", "mentees"]


def _profile_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Profile not found",
    )


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(current_user: CurrentUserDep, gateway: GatewayDep) -> ProfileResponse:
    """Return the caller's own profile."""
    profile = await gateway.get_profile(current_user.id)
    if profile is None:
        raise _profile_not_found()
    return profile


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    update_data: ProfileUpdate,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> ProfileResponse:
    """Apply a partial update to the caller's profile."""
    try:
        profile = await gateway.update_profile(
            current_user.id,
            update_data.model_dump(exclude_unset=True),
        )
    except InvalidOperationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if profile is None:
        raise _profile_not_found()
    return profile


@router.get("/me/dashboard", response_model=DashboardResponse)
async def get_dashboard(current_user: CurrentUserDep, gateway: GatewayDep) -> DashboardResponse:
    """Return the caller's profile, communities, connections and upcoming events."""
    profile, communities, connections, events = await asyncio.gather(
        gateway.get_profile(current_user.id),
        gateway.list_user_communities(current_user.id),
        gateway.list_connections(current_user.id),
        gateway.list_user_events(current_user.id),
    )
    if profile is None:
        raise _profile_not_found()
    return DashboardResponse(
        profile=profile,
        communities=communities,
        connections=connections,
        events=[e for e in events if e.status != "ended"],
    )


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(user_id: str, gateway: GatewayDep) -> ProfileResponse:
    """Return a member's public profile."""
    profile = await gateway.get_profile(user_id)
    if profile is None:
        raise _profile_not_found()
    return profile


@people_router.get("/", response_model=list[ProfileResponse])
async def list_people(
    gateway: GatewayDep,
    q: str = Query("", description="Match name, bio or skills"),
    role: Literal["all", "mentor", "mentee", "both"] = Query("all"),
    skill: str = Query(""),
) -> list[ProfileResponse]:
    """Browse member profiles with the directory filters."""
    people = await gateway.list_profiles()
    return filter_profiles(people, text=q, skills=[skill], roles=expand_roles([role]))


@search_router.get("/", response_model=SearchResponse)
async def search(
    gateway: GatewayDep,
    q: str = Query("", description="Free-text query"),
    categories: list[str] | None = Query(None, description="Only show these categories"),
    tab: SearchTab = Query("all"),
) -> SearchResponse:
    """Search communities and people together.

    The gateway narrows both listings by text; category and tab filters are
    applied on top, and the counts tell the client how many results each tab
    holds.
    """
    results = await gateway.search(q)
    facets = filter_search_results(
        results.communities,
        results.people,
        categories=categories,
        tab=tab,
    )
    return SearchResponse(
        query=q,
        communities=facets.communities,
        people=facets.people,
        counts=SearchCounts(**facets.counts),
    )
