"""
Database Adapters Module

Contains the SQLite and PostgreSQL adapter implementations for SQLModel/SQLAlchemy
async engines.
"""

from .postgresql_adapter import PostgreSQLAdapter
from .sqlite_adapter import SQLiteAdapter

__all__ = [
    "PostgreSQLAdapter",
    "SQLiteAdapter",
]
