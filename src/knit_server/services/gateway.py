"""Data access gateway between the API layer and the relational store.

``KnitGateway`` is constructed per request around one SQLAlchemy session and
handed to endpoints through FastAPI dependency injection. Every mutation
re-reads the affected counts after committing and returns them, so callers
never adjust counters locally.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import func, inspect, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import ScalarSelect, Select

from knit_server.db.time import as_utc, utcnow
from knit_server.errors import (
    ConflictError,
    EventFullError,
    InvalidOperationError,
    NotAMemberError,
    NotFoundError,
    StorageError,
)
from knit_server.models import (
    Comment,
    Community,
    CommunityMember,
    Connection,
    Event,
    EventAttendee,
    Post,
    PostLike,
    Profile,
)
from knit_server.models.connection import (
    CONNECTION_ACCEPTED,
    CONNECTION_DECLINED,
    CONNECTION_PENDING,
    connection_pair_key,
)
from knit_server.schemas.comment import CommentResponse
from knit_server.schemas.community import CommunityResponse, MembershipState
from knit_server.schemas.connection import ConnectionResponse
from knit_server.schemas.event import EventCreate, EventResponse, RsvpState
from knit_server.schemas.post import LikeState, PostResponse
from knit_server.schemas.profile import AuthorSummary, ProfileResponse
from knit_server.services.event_status import derive_event_status
from knit_server.services.filtering import (
    display_initials,
    expand_roles,
    filter_communities,
    filter_profiles,
)

__all__ = ["KnitGateway", "SearchResults"]

logger = logging.getLogger(__name__)

R = TypeVar("R")

DEFAULT_COMMUNITY_SEARCH_LIMIT = 20
DEFAULT_PEOPLE_SEARCH_LIMIT = 50


@dataclass
class SearchResults:
    """Communities and people matching one query."""

    communities: list[CommunityResponse]
    people: list[ProfileResponse]


def _storage_guard(
    method: Callable[..., Awaitable[R]],
) -> Callable[..., Awaitable[R]]:
    """Roll back and re-raise unexpected store failures as ``StorageError``."""

    @functools.wraps(method)
    async def wrapper(self: KnitGateway, *args: Any, **kwargs: Any) -> R:
        try:
            return await method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Storage failure in %s: %s", method.__name__, exc, exc_info=True)
            raise StorageError(f"{method.__name__} failed") from exc

    return wrapper


def _columns(row: Any) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for attr in inspect(row).mapper.column_attrs:
        value = getattr(row, attr.key)
        if isinstance(value, datetime):
            value = as_utc(value)
        values[attr.key] = value
    return values


def _author(profile: Profile | None) -> AuthorSummary | None:
    if profile is None:
        return None
    return AuthorSummary(name=profile.name, age=profile.age, role=profile.role)


def _profile_out(profile: Profile) -> ProfileResponse:
    data = _columns(profile)
    data["initials"] = display_initials(profile.name)
    return ProfileResponse.model_validate(data)


def _community_out(community: Community, member_count: int, post_count: int) -> CommunityResponse:
    data = _columns(community)
    data["member_count"] = int(member_count or 0)
    data["post_count"] = int(post_count or 0)
    return CommunityResponse.model_validate(data)


def _post_out(post: Post, author: Profile | None, likes: int, replies: int) -> PostResponse:
    data = _columns(post)
    data["likes"] = int(likes or 0)
    data["replies"] = int(replies or 0)
    data["author"] = _author(author)
    return PostResponse.model_validate(data)


def _event_out(
    event: Event,
    organizer: Profile | None,
    attendee_count: int,
    now: datetime,
    user_rsvp_status: str | None = None,
) -> EventResponse:
    data = _columns(event)
    data["attendee_count"] = int(attendee_count or 0)
    data["organizer"] = _author(organizer)
    data["status"] = derive_event_status(event.start_time, event.end_time, now).value
    data["user_rsvp_status"] = user_rsvp_status
    return EventResponse.model_validate(data)


def _comment_out(comment: Comment, author: Profile | None) -> CommentResponse:
    data = _columns(comment)
    data["author"] = _author(author)
    return CommentResponse.model_validate(data)


def _member_count() -> ScalarSelect[int]:
    return (
        select(func.count(CommunityMember.id))
        .where(CommunityMember.community_id == Community.id)
        .correlate(Community)
        .scalar_subquery()
    )


def _post_count() -> ScalarSelect[int]:
    return (
        select(func.count(Post.id))
        .where(Post.community_id == Community.id)
        .correlate(Community)
        .scalar_subquery()
    )


def _like_count() -> ScalarSelect[int]:
    return (
        select(func.count(PostLike.id))
        .where(PostLike.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )


def _reply_count() -> ScalarSelect[int]:
    return (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )


def _attending_count() -> ScalarSelect[int]:
    return (
        select(func.count(EventAttendee.id))
        .where(
            EventAttendee.event_id == Event.id,
            EventAttendee.rsvp_status == "attending",
        )
        .correlate(Event)
        .scalar_subquery()
    )


class KnitGateway:
    """Typed async operations over the relational store.

    Args:
        session: Request-scoped SQLAlchemy session. The gateway commits its
            own writes and never holds transactions across calls.
        community_search_limit: Maximum communities returned by a search.
        people_search_limit: Maximum profiles returned by a search.
    """

    def __init__(
        self,
        session: Session,
        *,
        community_search_limit: int = DEFAULT_COMMUNITY_SEARCH_LIMIT,
        people_search_limit: int = DEFAULT_PEOPLE_SEARCH_LIMIT,
    ) -> None:
        self.session = session
        self.community_search_limit = community_search_limit
        self.people_search_limit = people_search_limit

    # Communities

    def _community_rows(self) -> Select[tuple[Community, int, int]]:
        return select(
            Community,
            _member_count().label("member_count"),
            _post_count().label("post_count"),
        )

    @_storage_guard
    async def list_communities(self) -> list[CommunityResponse]:
        """Return all communities, featured first and then by name."""
        stmt = self._community_rows().order_by(Community.featured.desc(), Community.name)
        rows = self.session.execute(stmt).all()
        return [_community_out(c, members, posts) for c, members, posts in rows]

    @_storage_guard
    async def get_community(self, community_id: str) -> CommunityResponse | None:
        """Return a single community with its counts, or ``None`` if absent."""
        stmt = self._community_rows().where(Community.id == community_id)
        row = self.session.execute(stmt).first()
        if row is None:
            return None
        community, members, posts = row
        return _community_out(community, members, posts)

    @_storage_guard
    async def list_user_communities(self, user_id: str) -> list[CommunityResponse]:
        """Return the communities ``user_id`` has joined."""
        joined = select(CommunityMember.community_id).where(CommunityMember.user_id == user_id)
        stmt = (
            self._community_rows()
            .where(Community.id.in_(joined))
            .order_by(Community.featured.desc(), Community.name)
        )
        rows = self.session.execute(stmt).all()
        return [_community_out(c, members, posts) for c, members, posts in rows]

    @_storage_guard
    async def list_community_members(self, community_id: str) -> list[ProfileResponse]:
        """Return member profiles in join order."""
        stmt = (
            select(Profile)
            .join(CommunityMember, CommunityMember.user_id == Profile.id)
            .where(CommunityMember.community_id == community_id)
            .order_by(CommunityMember.joined_at, Profile.id)
        )
        return [_profile_out(p) for p in self.session.execute(stmt).scalars()]

    def _count_members(self, community_id: str) -> int:
        stmt = select(func.count(CommunityMember.id)).where(
            CommunityMember.community_id == community_id
        )
        return int(self.session.execute(stmt).scalar_one())

    def _membership(self, community_id: str, user_id: str) -> CommunityMember | None:
        stmt = select(CommunityMember).where(
            CommunityMember.community_id == community_id,
            CommunityMember.user_id == user_id,
        )
        return self.session.execute(stmt).scalars().first()

    @_storage_guard
    async def check_membership(self, community_id: str, user_id: str) -> bool:
        """Return True if ``user_id`` belongs to the community."""
        return self._membership(community_id, user_id) is not None

    @_storage_guard
    async def join_community(self, community_id: str, user_id: str) -> MembershipState:
        """Create a membership and return the recounted state.

        Raises:
            NotFoundError: If the community does not exist.
            ConflictError: If the user is already a member, including when a
                concurrent join wins the unique constraint first.
        """
        if self.session.get(Community, community_id) is None:
            raise NotFoundError("Community not found")
        if self._membership(community_id, user_id) is not None:
            raise ConflictError("Already a member of this community")

        self.session.add(CommunityMember(community_id=community_id, user_id=user_id))
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            logger.info("Concurrent join of community %s by %s rejected", community_id, user_id)
            raise ConflictError("Already a member of this community") from exc

        return MembershipState(
            community_id=community_id,
            user_id=user_id,
            is_member=True,
            member_count=self._count_members(community_id),
        )

    @_storage_guard
    async def leave_community(self, community_id: str, user_id: str) -> MembershipState:
        """Remove a membership and return the recounted state.

        Raises:
            NotAMemberError: If the user is not a member.
        """
        membership = self._membership(community_id, user_id)
        if membership is None:
            raise NotAMemberError("Not a member of this community")

        self.session.delete(membership)
        self.session.commit()
        return MembershipState(
            community_id=community_id,
            user_id=user_id,
            is_member=False,
            member_count=self._count_members(community_id),
        )

    # Posts

    def _post_rows(self) -> Select[tuple[Post, Profile, int, int]]:
        return select(
            Post,
            Profile,
            _like_count().label("likes"),
            _reply_count().label("replies"),
        ).outerjoin(Profile, Profile.id == Post.author_id)

    @_storage_guard
    async def list_posts_for_community(self, community_id: str) -> list[PostResponse]:
        """Return a community's posts newest first, each with its author summary."""
        stmt = (
            self._post_rows()
            .where(Post.community_id == community_id)
            .order_by(Post.created_at.desc(), Post.id)
        )
        rows = self.session.execute(stmt).all()
        return [_post_out(post, author, likes, replies) for post, author, likes, replies in rows]

    @_storage_guard
    async def get_post(self, post_id: str) -> PostResponse | None:
        """Return a post with its author summary, or ``None`` if absent."""
        row = self.session.execute(self._post_rows().where(Post.id == post_id)).first()
        if row is None:
            return None
        post, author, likes, replies = row
        return _post_out(post, author, likes, replies)

    @_storage_guard
    async def create_post(
        self,
        *,
        community_id: str,
        author_id: str,
        title: str,
        content: str,
        tags: list[str] | None = None,
    ) -> PostResponse:
        """Insert a post and return it as read back from the store.

        Title and content are expected to be validated by the caller.

        Raises:
            NotFoundError: If the community does not exist.
            NotAMemberError: If the author has not joined the community.
        """
        if self.session.get(Community, community_id) is None:
            raise NotFoundError("Community not found")
        if self._membership(community_id, author_id) is None:
            raise NotAMemberError("You must join the community to create posts")

        post = Post(
            community_id=community_id,
            author_id=author_id,
            title=title,
            content=content,
            tags=list(tags or []),
        )
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return _post_out(post, self.session.get(Profile, author_id), 0, 0)

    def _count_likes(self, post_id: str) -> int:
        stmt = select(func.count(PostLike.id)).where(PostLike.post_id == post_id)
        return int(self.session.execute(stmt).scalar_one())

    @_storage_guard
    async def toggle_post_like(self, post_id: str, user_id: str) -> LikeState | None:
        """Like or unlike a post; ``None`` if the post does not exist.

        Raises:
            ConflictError: If a concurrent like from the same user won the race.
        """
        if self.session.get(Post, post_id) is None:
            return None

        existing = self.session.execute(
            select(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        ).scalars().first()
        if existing is not None:
            self.session.delete(existing)
            liked = False
        else:
            self.session.add(PostLike(post_id=post_id, user_id=user_id))
            liked = True
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("Post like changed concurrently") from exc

        return LikeState(post_id=post_id, liked=liked, likes=self._count_likes(post_id))

    # Comments

    @_storage_guard
    async def list_comments(
        self,
        *,
        post_id: str | None = None,
        event_id: str | None = None,
    ) -> list[CommentResponse]:
        """Return the comments on a post or an event, oldest first."""
        if (post_id is None) == (event_id is None):
            raise ValueError("Exactly one of post_id or event_id is required")
        if post_id is not None:
            target = Comment.post_id == post_id
        else:
            target = Comment.event_id == event_id
        stmt = (
            select(Comment, Profile)
            .outerjoin(Profile, Profile.id == Comment.author_id)
            .where(target)
            .order_by(Comment.created_at, Comment.id)
        )
        return [_comment_out(c, author) for c, author in self.session.execute(stmt).all()]

    @_storage_guard
    async def add_comment(
        self,
        *,
        author_id: str,
        content: str,
        post_id: str | None = None,
        event_id: str | None = None,
    ) -> CommentResponse:
        """Attach a comment to a post or an event.

        Raises:
            NotFoundError: If the target does not exist.
        """
        if (post_id is None) == (event_id is None):
            raise ValueError("Exactly one of post_id or event_id is required")
        if post_id is not None and self.session.get(Post, post_id) is None:
            raise NotFoundError("Post not found")
        if event_id is not None and self.session.get(Event, event_id) is None:
            raise NotFoundError("Event not found")

        comment = Comment(author_id=author_id, content=content, post_id=post_id, event_id=event_id)
        self.session.add(comment)
        self.session.commit()
        self.session.refresh(comment)
        return _comment_out(comment, self.session.get(Profile, author_id))

    @_storage_guard
    async def like_comment(self, comment_id: str) -> int | None:
        """Increment a comment's like count in the store and return the new value."""
        result = self.session.execute(
            update(Comment)
            .where(Comment.id == comment_id)
            .values(likes=Comment.likes + 1)
        )
        if result.rowcount == 0:
            self.session.rollback()
            return None
        self.session.commit()
        return self.session.execute(
            select(Comment.likes).where(Comment.id == comment_id)
        ).scalar_one()

    # Profiles and search

    @_storage_guard
    async def get_profile(self, user_id: str) -> ProfileResponse | None:
        """Return a profile with its initials, or ``None`` if absent."""
        profile = self.session.get(Profile, user_id)
        return _profile_out(profile) if profile is not None else None

    @_storage_guard
    async def update_profile(
        self, user_id: str, updates: Mapping[str, Any]
    ) -> ProfileResponse | None:
        """Apply a partial update to a profile and return the stored result.

        Raises:
            InvalidOperationError: If an update would null a required column.
        """
        profile = self.session.get(Profile, user_id)
        if profile is None:
            return None
        for key, value in updates.items():
            if value is None and not Profile.__table__.c[key].nullable:
                raise InvalidOperationError(f"{key} cannot be cleared")
        for key, value in updates.items():
            setattr(profile, key, value)
        self.session.commit()
        self.session.refresh(profile)
        return _profile_out(profile)

    @_storage_guard
    async def list_profiles(self) -> list[ProfileResponse]:
        """Return every profile, newest first."""
        stmt = select(Profile).order_by(Profile.created_at.desc(), Profile.id)
        return [_profile_out(p) for p in self.session.execute(stmt).scalars()]

    async def search_communities(self, query: str = "") -> list[CommunityResponse]:
        """Return communities whose name, description or categories contain ``query``."""
        communities = await self.list_communities()
        matches = filter_communities(communities, text=query)
        return matches[: self.community_search_limit]

    async def search_people(self, query: str = "", role: str | None = None) -> list[ProfileResponse]:
        """Return profiles whose name, bio or skills contain ``query``.

        A ``mentor`` or ``mentee`` role also admits profiles marked ``both``.
        """
        people = await self.list_profiles()
        matches = filter_profiles(people, text=query, roles=expand_roles([role] if role else None))
        return matches[: self.people_search_limit]

    async def search(self, query: str = "") -> SearchResults:
        """Search communities and people independently and combine the results."""
        communities, people = await asyncio.gather(
            self.search_communities(query),
            self.search_people(query),
        )
        return SearchResults(communities=communities, people=people)

    # Events

    def _event_rows(self) -> Select[tuple[Event, Profile, int]]:
        return select(
            Event,
            Profile,
            _attending_count().label("attendee_count"),
        ).outerjoin(Profile, Profile.id == Event.organizer_id)

    def _viewer_rsvps(self, viewer_id: str | None, event_ids: list[str]) -> dict[str, str]:
        if viewer_id is None or not event_ids:
            return {}
        stmt = select(EventAttendee.event_id, EventAttendee.rsvp_status).where(
            EventAttendee.user_id == viewer_id,
            EventAttendee.event_id.in_(event_ids),
        )
        return {event_id: status for event_id, status in self.session.execute(stmt).all()}

    def _events_out(
        self, rows: list[Any], viewer_id: str | None, now: datetime | None
    ) -> list[EventResponse]:
        now = utcnow() if now is None else now
        rsvps = self._viewer_rsvps(viewer_id, [event.id for event, _, _ in rows])
        return [
            _event_out(event, organizer, count, now, rsvps.get(event.id))
            for event, organizer, count in rows
        ]

    @_storage_guard
    async def list_events(
        self,
        viewer_id: str | None = None,
        *,
        now: datetime | None = None,
    ) -> list[EventResponse]:
        """Return all events ordered by start time with organizer and attendance."""
        stmt = self._event_rows().order_by(Event.start_time, Event.id)
        return self._events_out(self.session.execute(stmt).all(), viewer_id, now)

    @_storage_guard
    async def list_user_events(
        self,
        user_id: str,
        *,
        now: datetime | None = None,
    ) -> list[EventResponse]:
        """Return events the user plans to attend or might attend."""
        going = select(EventAttendee.event_id).where(
            EventAttendee.user_id == user_id,
            EventAttendee.rsvp_status.in_(("attending", "maybe")),
        )
        stmt = self._event_rows().where(Event.id.in_(going)).order_by(Event.start_time, Event.id)
        return self._events_out(self.session.execute(stmt).all(), user_id, now)

    @_storage_guard
    async def get_event(
        self,
        event_id: str,
        viewer_id: str | None = None,
        *,
        now: datetime | None = None,
    ) -> EventResponse | None:
        """Return one event, or ``None`` if absent."""
        row = self.session.execute(self._event_rows().where(Event.id == event_id)).first()
        if row is None:
            return None
        return self._events_out([row], viewer_id, now)[0]

    @_storage_guard
    async def create_event(self, organizer_id: str, payload: EventCreate) -> EventResponse:
        """Schedule an event organized by ``organizer_id``.

        Raises:
            NotFoundError: If the referenced community does not exist.
        """
        if payload.community_id and self.session.get(Community, payload.community_id) is None:
            raise NotFoundError("Community not found")

        event = Event(organizer_id=organizer_id, **payload.model_dump())
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        return _event_out(event, self.session.get(Profile, organizer_id), 0, utcnow())

    def _count_attending(self, event_id: str) -> int:
        stmt = select(func.count(EventAttendee.id)).where(
            EventAttendee.event_id == event_id,
            EventAttendee.rsvp_status == "attending",
        )
        return int(self.session.execute(stmt).scalar_one())

    @_storage_guard
    async def rsvp_to_event(self, event_id: str, user_id: str, status: str) -> RsvpState:
        """Record or change a user's RSVP and return the recounted attendance.

        Raises:
            NotFoundError: If the event does not exist.
            EventFullError: If attending would exceed ``max_attendees``.
            ConflictError: If a concurrent first RSVP from the same user won
                the unique constraint.
        """
        event = self.session.get(Event, event_id)
        if event is None:
            raise NotFoundError("Event not found")

        existing = self.session.execute(
            select(EventAttendee).where(
                EventAttendee.event_id == event_id,
                EventAttendee.user_id == user_id,
            )
        ).scalars().first()

        newly_attending = status == "attending" and (
            existing is None or existing.rsvp_status != "attending"
        )
        if (
            newly_attending
            and event.max_attendees is not None
            and self._count_attending(event_id) >= event.max_attendees
        ):
            logger.info("RSVP to full event %s by %s rejected", event_id, user_id)
            raise EventFullError("Event is full")

        if existing is None:
            self.session.add(EventAttendee(event_id=event_id, user_id=user_id, rsvp_status=status))
        else:
            existing.rsvp_status = status
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("RSVP changed concurrently") from exc

        return RsvpState(
            event_id=event_id,
            user_id=user_id,
            status=status,
            attendee_count=self._count_attending(event_id),
        )

    # Connections

    def _connection_between(self, user_a: str, user_b: str) -> Connection | None:
        stmt = select(Connection).where(Connection.pair_key == connection_pair_key(user_a, user_b))
        return self.session.execute(stmt).scalars().first()

    @_storage_guard
    async def check_existing_connection(self, user_a: str, user_b: str) -> bool:
        """Return True if a pending or accepted connection links the two users."""
        connection = self._connection_between(user_a, user_b)
        return connection is not None and connection.status != CONNECTION_DECLINED

    @_storage_guard
    async def send_connection_request(
        self, from_id: str, to_id: str, message: str
    ) -> ConnectionResponse:
        """Open a connection request from ``from_id`` to ``to_id``.

        A previously declined request between the pair is reopened with the
        new requester and message.

        Raises:
            InvalidOperationError: If a user tries to connect to themselves.
            NotFoundError: If the addressee has no profile.
            ConflictError: If a pending or accepted connection already exists.
        """
        if from_id == to_id:
            raise InvalidOperationError("You cannot connect with yourself")
        if self.session.get(Profile, to_id) is None:
            raise NotFoundError("User not found")

        connection = self._connection_between(from_id, to_id)
        if connection is not None and connection.status != CONNECTION_DECLINED:
            raise ConflictError("A connection with this user already exists")

        if connection is None:
            connection = Connection(
                requester_id=from_id,
                addressee_id=to_id,
                pair_key=connection_pair_key(from_id, to_id),
                message=message,
            )
            self.session.add(connection)
        else:
            connection.requester_id = from_id
            connection.addressee_id = to_id
            connection.message = message
            connection.status = CONNECTION_PENDING
            connection.created_at = utcnow()
            connection.responded_at = None
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("A connection with this user already exists") from exc

        self.session.refresh(connection)
        logger.info("Connection request %s sent from %s to %s", connection.id, from_id, to_id)
        return ConnectionResponse.model_validate(_columns(connection))

    @_storage_guard
    async def respond_to_connection(
        self, connection_id: str, responder_id: str, accept: bool
    ) -> ConnectionResponse:
        """Accept or decline a pending request addressed to ``responder_id``.

        Raises:
            NotFoundError: If the connection does not exist.
            InvalidOperationError: If the responder is not the addressee or the
                request was already answered.
        """
        connection = self.session.get(Connection, connection_id)
        if connection is None:
            raise NotFoundError("Connection not found")
        if connection.addressee_id != responder_id:
            raise InvalidOperationError("Only the recipient can respond to this request")
        if connection.status != CONNECTION_PENDING:
            raise InvalidOperationError("This request has already been answered")

        connection.status = CONNECTION_ACCEPTED if accept else CONNECTION_DECLINED
        connection.responded_at = utcnow()
        self.session.commit()
        self.session.refresh(connection)
        logger.info("Connection %s %s by %s", connection.id, connection.status, responder_id)
        return ConnectionResponse.model_validate(_columns(connection))

    @_storage_guard
    async def list_connections(self, user_id: str) -> list[ConnectionResponse]:
        """Return every connection the user requested or received, newest first."""
        stmt = (
            select(Connection)
            .where((Connection.requester_id == user_id) | (Connection.addressee_id == user_id))
            .order_by(Connection.created_at.desc(), Connection.id)
        )
        return [
            ConnectionResponse.model_validate(_columns(c))
            for c in self.session.execute(stmt).scalars()
        ]
