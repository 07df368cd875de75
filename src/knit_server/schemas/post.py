"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .comment import CommentResponse
from .profile import AuthorSummary


class PostCreate(BaseModel):
    """Schema for creating a new post in a community."""

    title: str = Field(..., max_length=300, description="Post title")
    content: str = Field(..., max_length=10000, description="Post body")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")

    @field_validator("title", "content")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Reject values that are empty once surrounding whitespace is removed."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str]) -> list[str]:
        """Trim tags and drop the empty ones."""
        return [tag.strip() for tag in v if tag and tag.strip()]


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    community_id: str
    author_id: str
    title: str
    content: str
    tags: list[str]
    likes: int = 0
    replies: int = 0
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class LikeState(BaseModel):
    """Authoritative like state after toggling a like."""

    post_id: str
    liked: bool
    likes: int


class PostPage(BaseModel):
    """A post together with its comment thread."""

    post: PostResponse
    comments: list[CommentResponse]
