"""
Database Adapter Protocol

Defines the interface for database adapters that work with SQLModel and
SQLAlchemy async engines. Each adapter handles database-specific connection
patterns, configuration, and schema management.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, AsyncContextManager, Protocol

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
    from sqlmodel import SQLModel

SessionFactory = Callable[[], AsyncContextManager["AsyncSession"]]


class DatabaseAdapter(Protocol):
    """
    Database adapter interface for SQLModel/SQLAlchemy async connections.

    Implemented by the SQLite and PostgreSQL adapters.
    """

    async def create_engine(
        self, connection_string: str, **kwargs: Any
    ) -> "AsyncEngine":
        """
        Create an async SQLAlchemy engine for the database.

        Args:
            connection_string: Database connection URL
            **kwargs: Engine-specific configuration options

        Returns:
            Configured AsyncEngine instance

        Raises:
            ValueError: If the connection string uses the wrong scheme
            ConnectionError: If unable to create engine
        """
        ...

    async def create_session_factory(self, engine: "AsyncEngine") -> SessionFactory:
        """
        Create a session factory for the database engine.

        The returned factory creates async context managers that yield
        AsyncSession instances, committing on success and rolling back on error.

        Example:
            session_factory = await adapter.create_session_factory(engine)
            async with session_factory() as session:
                session.add(changelog)
        """
        ...

    async def initialize_schema(
        self, engine: "AsyncEngine", models: list[type["SQLModel"]] | None = None
    ) -> None:
        """
        Create tables for the given SQLModel classes (all metadata if None).

        Raises:
            RuntimeError: If schema creation fails
        """
        ...

    async def health_check(self, engine: "AsyncEngine") -> bool:
        """Return True if the database answers ``SELECT 1``."""
        ...

    async def get_connection_info(self, engine: "AsyncEngine") -> dict[str, Any]:
        """Get information about the database connection (driver, version, etc.)."""
        ...
