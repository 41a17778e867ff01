"""
Plugin Protocol

Defines the interface that all plugins must implement to be assembled by the
AppBuilder.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fastapi import FastAPI

    from .app_builder import AppBuilder


class AppPlugin(Protocol):
    """
    Plugin interface with three lifecycle methods:
    1. configure: Called during AppBuilder setup to register middleware/routes/hooks
    2. startup: Called during FastAPI application startup
    3. shutdown: Called during FastAPI application shutdown
    """

    def configure(self, builder: "AppBuilder") -> None:
        """
        Register middleware, routes and lifespan hooks with the builder.

        Synchronous because it only registers components; async initialization
        belongs in startup().
        """
        ...

    async def startup(self, app: "FastAPI") -> None:
        """Initialize connections and resources."""
        ...

    async def shutdown(self, app: "FastAPI") -> None:
        """Release what startup() acquired."""
        ...
