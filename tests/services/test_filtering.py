# tests/services/test_filtering.py
"""Tests for the pure list and search filters."""

from datetime import UTC, datetime, timedelta

import pytest

from knit_server.services.filtering import (
    display_initials,
    expand_roles,
    filter_communities,
    filter_events,
    filter_profiles,
    filter_search_results,
    matches_text,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)

PEOPLE = [
    {"name": "Sarah Chen", "bio": "Retired engineer", "skills": ["Python", "Woodworking"],
     "interests": ["Technology"], "role": "mentor"},
    {"name": "James Park", "bio": "Student baker", "skills": ["Video editing"],
     "interests": ["Cooking"], "role": "mentee"},
    {"name": "Maria Lopez", "bio": "Gardener and coder", "skills": ["Gardening", "JavaScript"],
     "interests": ["Gardening", "Technology"], "role": "both"},
    {"name": None, "bio": None, "skills": [], "interests": [], "role": "mentee"},
]

COMMUNITIES = [
    {"name": "Tech & Digital Skills", "description": "Bridging the digital divide",
     "categories": ["Technology", "Programming"]},
    {"name": "Cooking Traditions", "description": "Family recipes",
     "categories": ["Cooking", "Baking"]},
    {"name": "Gardening", "description": "Growing together",
     "categories": ["Gardening", "Sustainability"]},
]


def _event(title, start, hours=1, event_type="workshop", **extra):
    return {
        "title": title,
        "description": extra.get("description", ""),
        "location": extra.get("location", ""),
        "tags": extra.get("tags", []),
        "event_type": event_type,
        "start_time": start,
        "end_time": start + timedelta(hours=hours),
    }


EVENTS = [
    _event("Live coding", NOW - timedelta(minutes=30), event_type="workshop", tags=["python"]),
    _event("Bread meetup", NOW + timedelta(days=1), event_type="meetup", location="Bakery"),
    _event("Old discussion", NOW - timedelta(days=2), event_type="discussion"),
]


class TestMatchesText:
    def test_blank_query_matches_everything(self):
        assert matches_text("", None)
        assert matches_text("   ", "anything")

    def test_case_insensitive_substring(self):
        assert matches_text("CHEN", "Sarah Chen")

    def test_iterables_and_none_values(self):
        assert matches_text("wood", None, ["Python", "Woodworking"])
        assert not matches_text("wood", None, [])


class TestFilterProfiles:
    def test_no_filters_returns_everything_in_order(self):
        assert filter_profiles(PEOPLE) == PEOPLE

    def test_text_matches_name_bio_or_skills(self):
        names = [p["name"] for p in filter_profiles(PEOPLE, text="python")]
        assert names == ["Sarah Chen"]
        names = [p["name"] for p in filter_profiles(PEOPLE, text="coder")]
        assert names == ["Maria Lopez"]

    def test_skill_is_partial_and_case_insensitive(self):
        names = [p["name"] for p in filter_profiles(PEOPLE, skills=["script"])]
        assert names == ["Maria Lopez"]

    def test_role_all_disables_filter(self):
        assert filter_profiles(PEOPLE, roles=["all"]) == PEOPLE

    def test_role_is_exact(self):
        names = [p["name"] for p in filter_profiles(PEOPLE, roles=["mentor"])]
        assert names == ["Sarah Chen"]

    def test_groups_combine_with_and(self):
        assert filter_profiles(PEOPLE, text="gard", roles=["mentor"]) == []

    def test_filter_order_does_not_matter(self):
        once = filter_profiles(filter_profiles(PEOPLE, text="a"), roles=["mentee"])
        other = filter_profiles(filter_profiles(PEOPLE, roles=["mentee"]), text="a")
        assert once == other == filter_profiles(PEOPLE, text="a", roles=["mentee"])


class TestExpandRoles:
    def test_mentor_admits_both(self):
        assert expand_roles(["mentor"]) == ("both", "mentor")

    def test_all_disables(self):
        assert expand_roles(["all"]) == ()
        assert expand_roles(None) == ()


class TestFilterCommunities:
    def test_categories_are_or_within_group(self):
        names = [c["name"] for c in filter_communities(COMMUNITIES, categories=["Baking", "Gardening"])]
        assert names == ["Cooking Traditions", "Gardening"]

    def test_text_and_category_combine(self):
        assert filter_communities(COMMUNITIES, text="digital", categories=["Cooking"]) == []

    def test_text_matches_categories(self):
        names = [c["name"] for c in filter_communities(COMMUNITIES, text="sustain")]
        assert names == ["Gardening"]


class TestFilterEvents:
    def test_all_returns_everything(self):
        assert filter_events(EVENTS, kind="all", now=NOW) == EVENTS

    def test_live(self):
        assert [e["title"] for e in filter_events(EVENTS, kind="live", now=NOW)] == ["Live coding"]

    def test_upcoming(self):
        titles = [e["title"] for e in filter_events(EVENTS, kind="upcoming", now=NOW)]
        assert titles == ["Bread meetup"]

    def test_event_type(self):
        titles = [e["title"] for e in filter_events(EVENTS, kind="discussion", now=NOW)]
        assert titles == ["Old discussion"]

    def test_text_matches_location_and_tags(self):
        assert [e["title"] for e in filter_events(EVENTS, text="bakery", now=NOW)] == ["Bread meetup"]
        assert [e["title"] for e in filter_events(EVENTS, text="PYTHON", now=NOW)] == ["Live coding"]

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            filter_events(EVENTS, kind="party", now=NOW)


class TestFilterSearchResults:
    def test_counts_ignore_the_selected_tab(self):
        facets = filter_search_results(COMMUNITIES, PEOPLE, text="", tab="mentors")
        assert facets.communities == []
        assert [p["name"] for p in facets.people] == ["Sarah Chen", "Maria Lopez"]
        assert facets.counts == {"all": 7, "communities": 3, "mentors": 2, "mentees": 3}

    def test_categories_filter_people_by_interests(self):
        facets = filter_search_results(COMMUNITIES, PEOPLE, categories=["Technology"])
        assert [c["name"] for c in facets.communities] == ["Tech & Digital Skills"]
        assert [p["name"] for p in facets.people] == ["Sarah Chen", "Maria Lopez"]
        assert facets.counts["all"] == 3

    def test_communities_tab_hides_people(self):
        facets = filter_search_results(COMMUNITIES, PEOPLE, text="garden", tab="communities")
        assert [c["name"] for c in facets.communities] == ["Gardening"]
        assert facets.people == []
        assert facets.counts["mentors"] == 1

    def test_unknown_tab_rejected(self):
        with pytest.raises(ValueError):
            filter_search_results(COMMUNITIES, PEOPLE, tab="events")


class TestDisplayInitials:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Sarah Chen", "SC"),
            ("madonna", "M"),
            ("Mary Anne Smith", "MA"),
            ("  spaced   out  ", "SO"),
            ("", "UN"),
            (None, "UN"),
            ("   ", "UN"),
        ],
    )
    def test_initials(self, name, expected):
        assert display_initials(name) == expected
