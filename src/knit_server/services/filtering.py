"""Pure filtering helpers used by list pages and search.

Candidates can be ORM rows, Pydantic models or plain mappings; fields are
read by name from whichever is given. Filters never reorder their input.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

from knit_server.db.time import as_utc, utcnow
from knit_server.models.event import EVENT_TYPES

T = TypeVar("T")

INITIALS_FALLBACK = "UN"

PROFILE_TEXT_FIELDS = ("name", "bio", "skills")
COMMUNITY_TEXT_FIELDS = ("name", "description", "categories")
EVENT_TEXT_FIELDS = ("title", "description", "location", "tags")

SEARCH_TABS = ("all", "communities", "mentors", "mentees")


def _field(candidate: Any, name: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def _normalize(query: str | None) -> str:
    return (query or "").strip().lower()


def matches_text(query: str | None, *values: Any) -> bool:
    """Return True if any value contains ``query``, ignoring case.

    Values may be strings, iterables of strings or ``None``. A blank query
    matches everything.
    """
    needle = _normalize(query)
    if not needle:
        return True
    for value in values:
        if value is None:
            continue
        if isinstance(value, str):
            if needle in value.lower():
                return True
            continue
        for item in value:
            if item and needle in str(item).lower():
                return True
    return False


@dataclass(frozen=True)
class FilterGroup:
    """A set of acceptable values tested with one predicate.

    A candidate passes the group if the predicate holds for ANY of the
    values. A group without values is inactive.
    """

    name: str
    values: tuple[Any, ...]
    predicate: Callable[[Any, Any], bool] = field(compare=False)

    @property
    def active(self) -> bool:
        return bool(self.values)

    def accepts(self, candidate: Any) -> bool:
        if not self.values:
            return True
        return any(self.predicate(candidate, value) for value in self.values)


def text_group(query: str | None, fields: Sequence[str]) -> FilterGroup:
    """Build a free-text group searching ``fields`` of each candidate."""
    needle = _normalize(query)
    return FilterGroup(
        name="text",
        values=(needle,) if needle else (),
        predicate=lambda candidate, value: matches_text(
            value, *(_field(candidate, name) for name in fields)
        ),
    )


def membership_group(name: str, attribute: str, values: Iterable[str] | None) -> FilterGroup:
    """Build a group passing candidates whose list ``attribute`` holds a value exactly."""
    return FilterGroup(
        name=name,
        values=tuple(v for v in (values or ()) if v),
        predicate=lambda candidate, value: value in (_field(candidate, attribute) or ()),
    )


def partial_membership_group(
    name: str, attribute: str, values: Iterable[str] | None
) -> FilterGroup:
    """Like :func:`membership_group` but matches substrings, ignoring case."""
    return FilterGroup(
        name=name,
        values=tuple(_normalize(v) for v in (values or ()) if _normalize(v)),
        predicate=lambda candidate, value: matches_text(value, _field(candidate, attribute)),
    )


def equality_group(name: str, attribute: str, values: Iterable[str] | None) -> FilterGroup:
    """Build a group passing candidates whose ``attribute`` equals a value."""
    return FilterGroup(
        name=name,
        values=tuple(v for v in (values or ()) if v),
        predicate=lambda candidate, value: _field(candidate, attribute) == value,
    )


def apply_filters(candidates: Iterable[T], groups: Iterable[FilterGroup]) -> list[T]:
    """Return candidates passing every active group, in input order."""
    active = [group for group in groups if group.active]
    return [c for c in candidates if all(group.accepts(c) for group in active)]


def expand_roles(roles: Iterable[str] | None) -> tuple[str, ...]:
    """Return the profile roles admitted by a role selection.

    Selecting ``mentor`` or ``mentee`` also admits profiles marked ``both``;
    ``all`` or an empty selection disables the filter.
    """
    selected = {r for r in (roles or ()) if r and r != "all"}
    if not selected:
        return ()
    admitted = set(selected)
    if selected & {"mentor", "mentee"}:
        admitted.add("both")
    return tuple(sorted(admitted))


def filter_profiles(
    profiles: Iterable[T],
    *,
    text: str | None = None,
    skills: Iterable[str] | None = None,
    roles: Iterable[str] | None = None,
) -> list[T]:
    """Filter member profiles by free text, skill and exact role."""
    return apply_filters(
        profiles,
        [
            text_group(text, PROFILE_TEXT_FIELDS),
            partial_membership_group("skill", "skills", skills),
            equality_group("role", "role", [r for r in (roles or ()) if r != "all"]),
        ],
    )


def filter_communities(
    communities: Iterable[T],
    *,
    text: str | None = None,
    categories: Iterable[str] | None = None,
) -> list[T]:
    """Filter communities by free text and any of the selected categories."""
    return apply_filters(
        communities,
        [
            text_group(text, COMMUNITY_TEXT_FIELDS),
            membership_group("category", "categories", categories),
        ],
    )


def filter_events(
    events: Iterable[T],
    *,
    text: str | None = None,
    kind: str | None = "all",
    now: datetime | None = None,
) -> list[T]:
    """Filter map events by free text and a single kind selector.

    ``kind`` is ``all``, ``live``, ``upcoming`` or one of the event types.
    """
    now = utcnow() if now is None else as_utc(now)
    groups = [text_group(text, EVENT_TEXT_FIELDS)]

    if kind == "live":
        groups.append(
            FilterGroup(
                name="kind",
                values=(kind,),
                predicate=lambda event, _: (
                    as_utc(_field(event, "start_time")) <= now <= as_utc(_field(event, "end_time"))
                ),
            )
        )
    elif kind == "upcoming":
        groups.append(
            FilterGroup(
                name="kind",
                values=(kind,),
                predicate=lambda event, _: as_utc(_field(event, "start_time")) > now,
            )
        )
    elif kind and kind != "all":
        if kind not in EVENT_TYPES:
            raise ValueError(f"Unknown event filter: {kind}")
        groups.append(equality_group("kind", "event_type", [kind]))

    return apply_filters(events, groups)


@dataclass
class SearchFacets:
    """Filtered search results with per-tab counts."""

    communities: list[Any]
    people: list[Any]
    counts: dict[str, int]


def _is_mentor(person: Any) -> bool:
    return _field(person, "role") in ("mentor", "both")


def _is_mentee(person: Any) -> bool:
    return _field(person, "role") in ("mentee", "both")


def filter_search_results(
    communities: Iterable[Any],
    people: Iterable[Any],
    *,
    text: str | None = None,
    categories: Iterable[str] | None = None,
    tab: str = "all",
    people_categories_field: str = "interests",
) -> SearchFacets:
    """Apply the search page filters to communities and people together.

    Communities match on name, description and categories; people on name,
    bio and skills. Selected categories are checked against community
    categories and against each person's ``people_categories_field``. Counts
    are taken after text/category filtering but before the tab filter, so
    every tab label reflects what selecting it would show.
    """
    if tab not in SEARCH_TABS:
        raise ValueError(f"Unknown search tab: {tab}")

    matched_communities = filter_communities(communities, text=text, categories=categories)
    matched_people = apply_filters(
        people,
        [
            text_group(text, PROFILE_TEXT_FIELDS),
            membership_group("category", people_categories_field, categories),
        ],
    )

    mentors = [p for p in matched_people if _is_mentor(p)]
    mentees = [p for p in matched_people if _is_mentee(p)]
    counts = {
        "all": len(matched_communities) + len(matched_people),
        "communities": len(matched_communities),
        "mentors": len(mentors),
        "mentees": len(mentees),
    }

    if tab == "communities":
        return SearchFacets(matched_communities, [], counts)
    if tab == "mentors":
        return SearchFacets([], mentors, counts)
    if tab == "mentees":
        return SearchFacets([], mentees, counts)
    return SearchFacets(matched_communities, matched_people, counts)


def display_initials(name: str | None) -> str:
    """Return up to two uppercase initials for a display name.

    >>> display_initials("Sarah Chen")
    'SC'
    >>> display_initials("Madonna")
    'M'
    """
    parts = (name or "").split()
    if not parts:
        return INITIALS_FALLBACK
    return "".join(part[0] for part in parts).upper()[:2]
