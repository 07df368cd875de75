# src/knit_server/api/v1/endpoints/communities.py
"""Community-related endpoints for the Knit API."""

from __future__ import annotations

import asyncio
import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from knit_server.api.v1.dependencies import CurrentUserDep, GatewayDep, OptionalUserDep
from knit_server.errors import ConflictError, NotAMemberError, NotFoundError
from knit_server.schemas.community import (
    CommunityListResponse,
    CommunityPage,
    MembershipState,
)
from knit_server.schemas.post import PostCreate, PostResponse
from knit_server.schemas.profile import ProfileResponse
from knit_server.services.filtering import filter_profiles

router = APIRouter(prefix="/communities", tags=["communities"])
logger = logging.getLogger(__name__)

RoleFilter = Literal["all", "mentor", "mentee", "both"]


def _community_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Community not found",
    )


@router.get("/", response_model=CommunityListResponse)
async def list_communities(gateway: GatewayDep) -> CommunityListResponse:
    """List all communities, split into the featured section and the rest."""
    communities = await gateway.list_communities()
    return CommunityListResponse(
        featured=[c for c in communities if c.featured],
        others=[c for c in communities if not c.featured],
    )


@router.get("/{community_id}", response_model=CommunityPage)
async def get_community_page(
    community_id: str,
    gateway: GatewayDep,
    viewer: OptionalUserDep,
    q: str = Query("", description="Filter members by name, bio or skills"),
    skill: str = Query("", description="Filter members by skill"),
    role: RoleFilter = Query("all", description="Filter members by role"),
) -> CommunityPage:
    """Get a community with its posts and (filtered) members."""
    community, posts, members = await asyncio.gather(
        gateway.get_community(community_id),
        gateway.list_posts_for_community(community_id),
        gateway.list_community_members(community_id),
    )
    if community is None:
        raise _community_not_found()

    is_member = None
    if viewer is not None:
        is_member = await gateway.check_membership(community_id, viewer.id)

    return CommunityPage(
        community=community,
        posts=posts,
        members=filter_profiles(members, text=q, skills=[skill], roles=[role]),
        is_member=is_member,
    )


@router.get("/{community_id}/members", response_model=list[ProfileResponse])
async def list_community_members(
    community_id: str,
    gateway: GatewayDep,
    q: str = Query(""),
    skill: str = Query(""),
    role: RoleFilter = Query("all"),
) -> list[ProfileResponse]:
    """List a community's members, optionally filtered."""
    if await gateway.get_community(community_id) is None:
        raise _community_not_found()
    members = await gateway.list_community_members(community_id)
    return filter_profiles(members, text=q, skills=[skill], roles=[role])


@router.post(
    "/{community_id}/join",
    response_model=MembershipState,
    status_code=status.HTTP_201_CREATED,
)
async def join_community(
    community_id: str,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> MembershipState:
    """Join a community."""
    try:
        return await gateway.join_community(community_id, current_user.id)
    except NotFoundError as exc:
        raise _community_not_found() from exc
    except ConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc


@router.delete("/{community_id}/leave", response_model=MembershipState)
async def leave_community(
    community_id: str,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> MembershipState:
    """Leave a community."""
    try:
        return await gateway.leave_community(community_id, current_user.id)
    except NotAMemberError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.get("/{community_id}/posts", response_model=list[PostResponse])
async def get_community_posts(community_id: str, gateway: GatewayDep) -> list[PostResponse]:
    """Get posts from a specific community, newest first."""
    if await gateway.get_community(community_id) is None:
        raise _community_not_found()
    return await gateway.list_posts_for_community(community_id)


@router.post(
    "/{community_id}/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_community_post(
    community_id: str,
    post_data: PostCreate,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> PostResponse:
    """Publish a post in a community the caller has joined."""
    try:
        post = await gateway.create_post(
            community_id=community_id,
            author_id=current_user.id,
            title=post_data.title,
            content=post_data.content,
            tags=post_data.tags,
        )
    except NotFoundError as exc:
        raise _community_not_found() from exc
    except NotAMemberError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(exc),
        ) from exc

    logger.info("Post %s created in community %s", post.id, community_id)
    return post
