"""SQLAlchemy model for connection requests between members."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from knit_server.db.session import Base
from knit_server.db.time import utcnow
from knit_server.models.profile import new_id

CONNECTION_PENDING = "pending"
CONNECTION_ACCEPTED = "accepted"
CONNECTION_DECLINED = "declined"


class Connection(Base):
    """Mentorship connection between two members.

    ``pair_key`` holds both ids sorted and joined so that the store rejects a
    second connection for the same two users regardless of direction.
    """

    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("pair_key", name="uq_connections_pair"),
        CheckConstraint("requester_id <> addressee_id", name="ck_connections_distinct"),
        CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name="ck_connections_status",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    requester_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    addressee_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    pair_key: Mapped[str] = mapped_column(String(73), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=CONNECTION_PENDING)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


def connection_pair_key(user_a: str, user_b: str) -> str:
    """Return the direction-independent key for a pair of user ids."""
    first, second = sorted((user_a, user_b))
    return f"{first}:{second}"
