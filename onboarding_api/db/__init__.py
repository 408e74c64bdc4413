"""
Database module - injected PostgreSQL client and table definitions.
"""
from onboarding_api.db.postgres import Database, get_database
from onboarding_api.db.tables import metadata

__all__ = [
    "Database",
    "get_database",
    "metadata"
]
