"""Profile-related Pydantic schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ProfileRole = Literal["mentor", "mentee", "both"]


class AuthorSummary(BaseModel):
    """Denormalized author fields shown next to posts, comments and events."""

    name: str | None = None
    age: int | None = None
    role: ProfileRole | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    """Schema for profile information returned by the API."""

    id: str
    name: str | None
    email: str | None = None
    bio: str | None
    age: int | None
    location: str | None
    skills: list[str]
    interests: list[str]
    role: ProfileRole
    experience: str | None = None
    availability: str | None = None
    rating: float | None
    review_count: int
    preferred_meeting_style: list[str] = Field(default_factory=list)
    initials: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    """Partial update submitted by the profile owner."""

    name: str | None = Field(None, min_length=1, max_length=100)
    bio: str | None = Field(None, max_length=2000)
    age: int | None = Field(None, ge=0, le=130)
    location: str | None = Field(None, max_length=200)
    skills: list[str] | None = None
    interests: list[str] | None = None
    role: ProfileRole | None = None
    experience: str | None = None
    availability: str | None = None
    preferred_meeting_style: list[str] | None = None

    @field_validator("role", "skills", "interests", "preferred_meeting_style", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Omit a field to keep it; ``null`` cannot clear a required value."""
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("skills", "interests", "preferred_meeting_style")
    @classmethod
    def strip_blank_entries(cls, v: list[str] | None) -> list[str] | None:
        """Trim list entries and drop the empty ones."""
        if v is None:
            return v
        return [item.strip() for item in v if item and item.strip()]
