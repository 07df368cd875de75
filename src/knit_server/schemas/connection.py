"""Connection-request Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONNECTION_MESSAGE = "Hi! I'd love to connect and learn from each other."


class ConnectionCreate(BaseModel):
    """Request to connect with another member."""

    to_user_id: str
    message: str = Field(DEFAULT_CONNECTION_MESSAGE, max_length=1000)


class ConnectionDecision(BaseModel):
    """Addressee's answer to a pending request."""

    accept: bool


class ConnectionResponse(BaseModel):
    """Schema for connection information returned by the API."""

    id: str
    requester_id: str
    addressee_id: str
    message: str
    status: Literal["pending", "accepted", "declined"]
    created_at: datetime
    responded_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
