#!/usr/bin/env python3
"""
Create the onboarding tables.

Safe to run more than once: existing tables are left alone.
Usage: python scripts/init_db.py
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy.exc import SQLAlchemyError

from onboarding_api.core.config import get_settings
from onboarding_api.db.postgres import Database
from onboarding_api.db.tables import metadata


def main():
    settings = get_settings()
    database = Database.from_settings(settings)

    print("Creating onboarding tables...")
    try:
        database.create_tables()
    except SQLAlchemyError as e:
        print(f"❌ Failed: {e}")
        return 1
    finally:
        database.dispose()

    for table in metadata.sorted_tables:
        print(f"   ✅ {table.name}")
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
