#!/usr/bin/env python3
"""
Database seeding script for development and testing.
Creates the demo projects, material tests and an upcoming reminder in the
database named by DATABASE_URL.
"""

import sys
from pathlib import Path

# Add parent directory to path to import our modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fieldbook.config import settings
from fieldbook.database import build_engine, build_session_factory, create_tables
from fieldbook.services.clock import SystemClock
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.sample_data import seed_sample_data


def main() -> int:
    if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
        print("✗ DATABASE_URL points at an in-memory database; nothing would persist")
        return 1

    engine = build_engine(settings.database_url)
    create_tables(engine)
    print("✓ Database tables created")

    store = EntityStore(build_session_factory(engine), SystemClock())
    if seed_sample_data(store):
        print("✓ Sample data loaded")
    else:
        print("✓ Database already has projects, nothing to do")
    return 0


if __name__ == "__main__":
    sys.exit(main())
