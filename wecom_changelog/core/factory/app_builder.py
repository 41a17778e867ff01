"""
AppBuilder - FastAPI Application Factory

Assembles the service from plugins, priority-ordered middleware, routers and
lifespan hooks.
"""

from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI

from ..logging.logger import get_app_logger

if TYPE_CHECKING:
    from .plugin import AppPlugin


class AppBuilder:
    """
    Fluent builder for the FastAPI application.

    Example:
        app = (AppBuilder()
            .add_plugin(CorePlugin())
            .add_plugin(DatabasePlugin(settings.database_url))
            .configure(title="WeCom Edition Changelog")
            .build())
    """

    def __init__(self):
        self.plugins: list[AppPlugin] = []
        self.middlewares: list[tuple[type, dict, int]] = []  # (class, kwargs, priority)
        self.routers: list[tuple[Any, dict]] = []  # (router, include_kwargs)
        self.exception_handlers: list[tuple[type[Exception], Callable]] = []
        self.startup_hooks: list[tuple[Callable, int]] = []  # (hook, priority)
        self.shutdown_hooks: list[tuple[Callable, int]] = []  # (hook, priority)
        self.config_overrides: dict[str, Any] = {}

    def add_plugin(self, plugin: "AppPlugin") -> "AppBuilder":
        """Add a plugin. Returns self for method chaining."""
        self.plugins.append(plugin)
        return self

    def add_middleware(
        self, middleware_class: type, priority: int = 50, **kwargs: Any
    ) -> "AppBuilder":
        """
        Add middleware with priority ordering.

        Lower numbers run first (outer middleware), higher numbers run closer
        to the routes.
        """
        self.middlewares.append((middleware_class, kwargs, priority))
        return self

    def add_router(self, router: Any, **kwargs: Any) -> "AppBuilder":
        """Add a router; kwargs are passed to app.include_router()."""
        self.routers.append((router, kwargs))
        return self

    def add_exception_handler(
        self, exc_class: type[Exception], handler: Callable
    ) -> "AppBuilder":
        """Register an exception handler on the built app."""
        self.exception_handlers.append((exc_class, handler))
        return self

    def add_startup_hook(self, hook: Callable, priority: int = 50) -> "AppBuilder":
        """
        Add a startup hook. Lower priority numbers execute first.

        Priority Guidelines:
        - 10: Core system initialization (logging, HTTP session)
        - 20: Infrastructure (database)
        - 30: Application services
        - 50: User hooks (default)
        """
        self.startup_hooks.append((hook, priority))
        return self

    def add_shutdown_hook(self, hook: Callable, priority: int = 50) -> "AppBuilder":
        """
        Add a shutdown hook. Higher priority numbers execute first.

        Priority Guidelines:
        - 90: Core system cleanup (HTTP session) - runs last
        - 20: Infrastructure cleanup (database)
        """
        self.shutdown_hooks.append((hook, priority))
        return self

    def configure(self, **overrides: Any) -> "AppBuilder":
        """Override default FastAPI constructor arguments."""
        self.config_overrides.update(overrides)
        return self

    def build(self) -> FastAPI:
        """
        Build the configured FastAPI application.

        1. Configure plugins (sync setup only)
        2. Create FastAPI app with lifespan and config
        3. Add middleware and exception handlers
        4. Include routers
        """
        logger = get_app_logger()
        logger.debug(f"Building FastAPI app with {len(self.plugins)} plugins")

        for plugin in self.plugins:
            plugin.configure(self)

        @asynccontextmanager
        async def unified_lifespan(app: FastAPI):
            try:
                await self._execute_all_startup_hooks(app)
                logger.info("All startup hooks completed successfully")
                yield
            finally:
                await self._execute_all_shutdown_hooks(app)
                logger.info("All shutdown hooks completed")

        default_config = {
            "title": "WeCom Edition Changelog",
            "description": "Edition changelog of WeCom third-party application tenants",
            "version": "1.0.0",
            "lifespan": unified_lifespan,
        }
        default_config.update(self.config_overrides)

        app = FastAPI(**default_config)

        # FastAPI wraps middleware in reverse order of addition
        sorted_middlewares = sorted(self.middlewares, key=lambda x: x[2], reverse=True)
        for middleware_class, kwargs, priority in sorted_middlewares:
            app.add_middleware(middleware_class, **kwargs)
            logger.debug(
                f"Added middleware {middleware_class.__name__} (priority: {priority})"
            )

        for exc_class, handler in self.exception_handlers:
            app.add_exception_handler(exc_class, handler)

        for router, kwargs in self.routers:
            app.include_router(router, **kwargs)

        logger.info(
            f"AppBuilder created FastAPI app: {len(self.plugins)} plugins, "
            f"{len(self.middlewares)} middlewares, {len(self.routers)} routers"
        )
        return app

    async def _execute_all_startup_hooks(self, app: FastAPI) -> None:
        """Execute startup hooks in priority order, failing fast."""
        logger = get_app_logger()

        for hook, priority in sorted(self.startup_hooks, key=lambda x: x[1]):
            hook_name = getattr(hook, "__name__", "anonymous_hook")
            logger.debug(f"Executing startup hook: {hook_name} (priority: {priority})")
            try:
                await hook(app)
            except Exception as e:
                logger.error(f"Startup hook {hook_name} failed: {e}", exc_info=True)
                raise

    async def _execute_all_shutdown_hooks(self, app: FastAPI) -> None:
        """Execute shutdown hooks in reverse priority order, isolating errors."""
        logger = get_app_logger()

        for hook, priority in sorted(
            self.shutdown_hooks, key=lambda x: x[1], reverse=True
        ):
            hook_name = getattr(hook, "__name__", "anonymous_hook")
            try:
                logger.debug(
                    f"Executing shutdown hook: {hook_name} (priority: {priority})"
                )
                await hook(app)
            except Exception as e:
                # Keep shutting down the remaining hooks
                logger.error(f"Error in shutdown hook {hook_name}: {e}", exc_info=True)
