"""
PostgreSQL Database Adapter

Provides PostgreSQL-specific implementation for SQLModel/SQLAlchemy async connections
using asyncpg as the async driver.
"""

from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from ..adapter import SessionFactory


class PostgreSQLAdapter:
    """
    PostgreSQL adapter for SQLModel/SQLAlchemy async connections.

    Uses asyncpg driver with connection pooling.
    """

    async def create_engine(self, connection_string: str, **kwargs: Any) -> AsyncEngine:
        """
        Create PostgreSQL async engine with asyncpg driver.

        Args:
            connection_string: PostgreSQL connection URL (postgresql+asyncpg://...)
            **kwargs: Engine configuration options

        Returns:
            Configured AsyncEngine for PostgreSQL

        Raises:
            ValueError: If connection string is invalid
            ConnectionError: If unable to create engine
        """
        connection_string = self.normalize_url(connection_string)

        default_config = {
            "pool_size": 10,
            "max_overflow": 20,
            "pool_timeout": 30,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "echo": False,
        }
        default_config.update(kwargs)

        try:
            return create_async_engine(connection_string, **default_config)
        except Exception as e:
            raise ConnectionError(f"Failed to create PostgreSQL engine: {e}") from e

    @staticmethod
    def normalize_url(url: str) -> str:
        """
        Normalize database URL to use asyncpg driver.

        Raises:
            ValueError: If the URL is not a PostgreSQL URL
        """
        if url.startswith("postgresql+asyncpg://"):
            return url
        # SQLAlchemy only knows the "postgresql" dialect name
        if url.startswith("postgres+asyncpg://"):
            return url.replace("postgres+asyncpg://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)

        raise ValueError(
            "PostgreSQL connection string must use postgresql+asyncpg:// scheme"
        )

    async def create_session_factory(self, engine: AsyncEngine) -> SessionFactory:
        """
        Create session factory for PostgreSQL async sessions.

        Args:
            engine: PostgreSQL AsyncEngine instance

        Returns:
            Session factory function that returns context manager
        """
        async_session_maker = sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        @asynccontextmanager
        async def session_factory():
            async with async_session_maker() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        return session_factory

    async def initialize_schema(
        self, engine: AsyncEngine, models: list[type[SQLModel]] | None = None
    ) -> None:
        """
        Initialize PostgreSQL schema from SQLModel definitions.

        Raises:
            RuntimeError: If schema creation fails
        """
        tables = [model.__table__ for model in models] if models else None
        try:
            async with engine.begin() as conn:
                await conn.run_sync(
                    lambda sync_conn: SQLModel.metadata.create_all(
                        sync_conn, tables=tables
                    )
                )
        except Exception as e:
            raise RuntimeError(f"Failed to initialize PostgreSQL schema: {e}") from e

    async def health_check(self, engine: AsyncEngine) -> bool:
        """Perform PostgreSQL health check."""
        try:
            async with engine.begin() as conn:
                result = await conn.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception:
            return False

    async def get_connection_info(self, engine: AsyncEngine) -> dict[str, Any]:
        """Get PostgreSQL connection information."""
        try:
            async with engine.begin() as conn:
                version_result = await conn.execute(text("SELECT version()"))
                version = version_result.scalar()

                return {
                    "driver": "asyncpg",
                    "database": "postgresql",
                    "version": version,
                    "pool_size": engine.pool.size(),
                    "pool_checked_in": engine.pool.checkedin(),
                    "pool_checked_out": engine.pool.checkedout(),
                    "healthy": True,
                }
        except Exception as e:
            return {
                "driver": "asyncpg",
                "database": "postgresql",
                "error": str(e),
                "healthy": False,
            }
