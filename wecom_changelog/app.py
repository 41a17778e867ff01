"""
Application factory.

Run with:
    uvicorn wecom_changelog.app:create_app --factory
"""

from fastapi import FastAPI

from .core.config.settings import settings
from .core.factory.app_builder import AppBuilder
from .core.plugins.core_plugin import CorePlugin
from .core.plugins.database_plugin import DatabasePlugin
from .database.models import ALL_MODELS


def create_app(database_url: str | None = None, setup_logging: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database_url: Override of DATABASE_URL
        setup_logging: Configure Rich logging on startup

    Returns:
        FastAPI application with core and database plugins
    """
    return (
        AppBuilder()
        .add_plugin(CorePlugin(setup_logging=setup_logging))
        .add_plugin(
            DatabasePlugin(
                database_url or settings.database_url,
                models=ALL_MODELS,
                initialize_schema=settings.database_init_schema,
                echo=settings.database_echo,
            )
        )
        .configure(
            version=settings.version,
            docs_url="/docs" if settings.is_development else None,
            redoc_url=None,
        )
        .build()
    )
