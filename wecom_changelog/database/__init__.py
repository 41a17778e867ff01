"""
Database components: SQLModel tables and async engine adapters.

Usage:
    from wecom_changelog.database import create_adapter

    adapter = create_adapter(settings.database_url)
"""

from .adapter import DatabaseAdapter, SessionFactory
from .adapters.postgresql_adapter import PostgreSQLAdapter
from .adapters.sqlite_adapter import SQLiteAdapter
from .models import ALL_MODELS, SocialEditionChangelogWecom, SocialTenant


def create_adapter(connection_string: str) -> DatabaseAdapter:
    """
    Pick the adapter matching a connection URL scheme.

    Raises:
        ValueError: If the scheme is not SQLite or PostgreSQL
    """
    if connection_string.startswith("sqlite"):
        return SQLiteAdapter()
    if connection_string.startswith(("postgresql", "postgres")):
        return PostgreSQLAdapter()
    raise ValueError(f"Unsupported database URL scheme: {connection_string.split(':', 1)[0]}")


__all__ = [
    "ALL_MODELS",
    "DatabaseAdapter",
    "PostgreSQLAdapter",
    "SQLiteAdapter",
    "SessionFactory",
    "SocialEditionChangelogWecom",
    "SocialTenant",
    "create_adapter",
]
