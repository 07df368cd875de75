# tests/test_seed_demo.py
"""Tests for the demo data loader."""

from sqlalchemy import func, select

from knit_server.models import Community
from knit_server.scripts.seed_demo import DEMO_COMMUNITIES, seed_communities


def test_seed_communities_is_idempotent(db_session) -> None:
    """A second run adds nothing."""
    assert seed_communities(db_session) == len(DEMO_COMMUNITIES)
    assert seed_communities(db_session) == 0

    total = db_session.execute(select(func.count(Community.id))).scalar_one()
    assert total == len(DEMO_COMMUNITIES)


def test_seed_skips_existing_names(db_session, community) -> None:
    """Communities already present by name are left alone."""
    added = seed_communities(db_session)
    assert added == len(DEMO_COMMUNITIES) - 1

    featured = db_session.scalars(select(Community.name).where(Community.featured)).all()
    assert set(featured) == {
        "Tech & Digital Skills",
        "Creative Arts & Crafts",
        "Cooking & Culinary Traditions",
    }
