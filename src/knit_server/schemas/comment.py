"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .profile import AuthorSummary


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post or an event."""

    content: str = Field(..., max_length=5000)

    @field_validator("content")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Reject blank comments."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: str
    author_id: str
    post_id: str | None = None
    event_id: str | None = None
    content: str
    likes: int
    created_at: datetime
    author: AuthorSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class CommentLikes(BaseModel):
    """Like count of a comment after it was liked."""

    comment_id: str
    likes: int
