"""Create tables and load the demo communities into the configured store."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy import select
from sqlalchemy.orm import Session

from knit_server.core.settings import settings
from knit_server.db.session import build_session_factory, create_tables, drop_tables
from knit_server.errors import StorageConfigurationError
from knit_server.models import Community

DEMO_COMMUNITIES: list[dict[str, object]] = [
    {
        "name": "Tech & Digital Skills",
        "description": (
            "Bridging the digital divide. Young tech enthusiasts teaching seniors, "
            "while learning wisdom about problem-solving and patience."
        ),
        "categories": ["Technology", "Programming", "Digital Literacy"],
        "featured": True,
    },
    {
        "name": "Creative Arts & Crafts",
        "description": (
            "Traditional craftsmanship meets modern creativity. Master artisans "
            "sharing techniques with emerging artists."
        ),
        "categories": ["Art", "Crafts", "Design", "Photography"],
        "featured": True,
    },
    {
        "name": "Cooking & Culinary Traditions",
        "description": (
            "Family recipes and cooking techniques passed down through generations, "
            "mixed with modern culinary innovation."
        ),
        "categories": ["Cooking", "Baking", "Traditional Recipes"],
        "featured": True,
    },
    {
        "name": "Career & Business Wisdom",
        "description": (
            "Experienced professionals mentoring young entrepreneurs and career "
            "starters. Share insights on leadership and growth."
        ),
        "categories": ["Business", "Career", "Leadership", "Entrepreneurship"],
    },
    {
        "name": "Health & Wellness",
        "description": (
            "Holistic health practices, fitness routines, and wellness wisdom "
            "shared across generations."
        ),
        "categories": ["Health", "Fitness", "Mental Wellness", "Nutrition"],
    },
    {
        "name": "Gardening & Sustainability",
        "description": (
            "Traditional gardening wisdom meets modern sustainability practices. "
            "Growing together, literally and figuratively."
        ),
        "categories": ["Gardening", "Sustainability", "Environment"],
    },
    {
        "name": "Languages & Cultural Exchange",
        "description": (
            "Learn languages, share cultural traditions, and build understanding "
            "across different backgrounds and generations."
        ),
        "categories": ["Languages", "Culture", "Travel", "Traditions"],
    },
    {
        "name": "Music & Performance Arts",
        "description": (
            "From classical to contemporary, share musical knowledge and "
            "performance skills across generations."
        ),
        "categories": ["Music", "Performance", "Instruments", "Singing"],
    },
]


def seed_communities(session: Session) -> int:
    """Insert demo communities that are not present yet; return how many were added."""
    existing = set(session.scalars(select(Community.name)))
    added = 0
    for data in DEMO_COMMUNITIES:
        if data["name"] in existing:
            continue
        session.add(Community(**data))
        added += 1
    session.commit()
    return added


def main() -> None:
    parser = argparse.ArgumentParser(description="Create tables and load demo communities")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before recreating it.",
    )
    args = parser.parse_args()

    try:
        session_factory = build_session_factory(settings)
    except StorageConfigurationError as exc:
        print(f"[seed_demo] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    engine = session_factory.kw["bind"]
    if args.drop_tables:
        drop_tables(engine)
        print("[seed_demo] dropped all tables")
    create_tables(engine)

    with session_factory() as session:
        added = seed_communities(session)
    print(f"[seed_demo] added {added} communities")


if __name__ == "__main__":
    main()
