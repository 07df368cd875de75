"""Community-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .post import PostResponse
from .profile import ProfileResponse


class CommunityResponse(BaseModel):
    """Schema for community information returned by the API."""

    id: str
    name: str
    description: str
    categories: list[str]
    featured: bool
    member_count: int = 0
    post_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommunityListResponse(BaseModel):
    """Communities split into the featured section and everything else."""

    featured: list[CommunityResponse]
    others: list[CommunityResponse]


class CommunityPage(BaseModel):
    """Everything the community detail page shows."""

    community: CommunityResponse
    posts: list[PostResponse]
    members: list[ProfileResponse]
    is_member: bool | None = None


class MembershipState(BaseModel):
    """Authoritative membership state returned by join and leave."""

    community_id: str
    user_id: str
    is_member: bool
    member_count: int
