"""
Database Plugin

Integrates SQLModel/SQLAlchemy async engines with the application lifespan
through the adapter pattern.
"""

from typing import TYPE_CHECKING, Any

from ..logging.logger import get_app_logger

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlmodel import SQLModel

    from ...database.adapter import DatabaseAdapter
    from ..factory.app_builder import AppBuilder


class DatabasePlugin:
    """
    Database plugin for SQLModel/SQLAlchemy integration.

    Example:
        db_plugin = DatabasePlugin(
            "sqlite+aiosqlite:///./app.db",
            models=ALL_MODELS,
        )

        # Usage in app
        async with app.state.db_session() as session:
            result = await session.execute(select(SocialTenant))
    """

    def __init__(
        self,
        connection_string: str,
        adapter: "DatabaseAdapter | None" = None,
        models: list[type["SQLModel"]] | None = None,
        initialize_schema: bool = True,
        **adapter_kwargs: Any,
    ):
        """
        Initialize database plugin.

        Args:
            connection_string: Database connection URL
            adapter: DatabaseAdapter implementation; picked from the URL if None
            models: SQLModel classes to create tables for
            initialize_schema: Whether to create tables on startup
            **adapter_kwargs: Additional engine arguments for the adapter
        """
        from ...database import create_adapter

        self.connection_string = connection_string
        self.adapter = adapter or create_adapter(connection_string)
        self.models = models or []
        self.initialize_schema = initialize_schema
        self.adapter_kwargs = adapter_kwargs

        self.engine = None
        self.session_factory = None

    def configure(self, builder: "AppBuilder") -> None:
        builder.add_startup_hook(self.startup, priority=20)
        builder.add_shutdown_hook(self.shutdown, priority=20)

    async def startup(self, app: "FastAPI") -> None:
        """
        Create the engine and session factory, check health and create tables.

        Raises:
            RuntimeError: If the database cannot be initialized
        """
        logger = get_app_logger()

        try:
            logger.debug(
                f"Creating database engine with adapter: {self.adapter.__class__.__name__}"
            )
            self.engine = await self.adapter.create_engine(
                self.connection_string, **self.adapter_kwargs
            )
            self.session_factory = await self.adapter.create_session_factory(
                self.engine
            )

            if not await self.adapter.health_check(self.engine):
                raise RuntimeError("Database health check failed")

            if self.initialize_schema and self.models:
                await self.adapter.initialize_schema(self.engine, self.models)
                logger.info(
                    f"Database schema initialized for models: {[m.__name__ for m in self.models]}"
                )

            app.state.db_engine = self.engine
            app.state.db_session = self.session_factory
            app.state.db_adapter = self.adapter

            connection_info = await self.adapter.get_connection_info(self.engine)
            logger.info(
                f"Database initialized - Driver: {connection_info.get('driver')}, "
                f"Database: {connection_info.get('database')}, "
                f"Version: {connection_info.get('version', 'unknown')}"
            )

        except Exception as e:
            logger.error(f"Failed to initialize database plugin: {e}", exc_info=True)
            raise RuntimeError(f"Database plugin startup failed: {e}") from e

    async def shutdown(self, app: "FastAPI") -> None:
        """Dispose of the engine and clear app state."""
        logger = get_app_logger()

        if self.engine:
            await self.engine.dispose()
            logger.info("Database engine disposed successfully")

        for attr in ("db_engine", "db_session", "db_adapter"):
            if hasattr(app.state, attr):
                delattr(app.state, attr)
