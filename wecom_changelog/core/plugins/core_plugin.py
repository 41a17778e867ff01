"""
Core Plugin

Provides the service foundation: logging, the shared HTTP session, the WeCom
template, the middleware stack, exception handlers and core routes.
"""

from typing import TYPE_CHECKING

import aiohttp
from fastapi import FastAPI

from wecom_changelog.api.middleware.error_handler import (
    ErrorHandlerMiddleware,
    social_error_handler,
    wecom_api_error_handler,
)
from wecom_changelog.api.middleware.request_logging import RequestLoggingMiddleware
from wecom_changelog.api.routes.health import router as health_router
from wecom_changelog.api.routes.wecom_changelog import router as wecom_changelog_router
from wecom_changelog.domain.exceptions import SocialError
from wecom_changelog.messaging.wecom.template import WeComTemplate
from wecom_changelog.messaging.wecom.utils.error_helpers import WeComApiError

from ..config.settings import settings
from ..logging.logger import get_app_logger, setup_app_logging

if TYPE_CHECKING:
    from ..factory.app_builder import AppBuilder


class CorePlugin:
    """
    Core functionality as a plugin:
    - Application logging setup
    - Persistent HTTP session and WeCom template
    - Middleware (ErrorHandler, RequestLogging) and exception handlers
    - Routes (health, edition changelog)
    """

    def __init__(self, setup_logging: bool = True):
        self.setup_logging = setup_logging

    def configure(self, builder: "AppBuilder") -> None:
        builder.add_middleware(ErrorHandlerMiddleware, priority=80)
        builder.add_middleware(RequestLoggingMiddleware, priority=70)

        builder.add_exception_handler(SocialError, social_error_handler)
        builder.add_exception_handler(WeComApiError, wecom_api_error_handler)

        builder.add_router(health_router)
        builder.add_router(wecom_changelog_router)

        builder.add_startup_hook(self.startup, priority=10)
        builder.add_shutdown_hook(self.shutdown, priority=90)

    async def startup(self, app: FastAPI) -> None:
        """
        Initialize logging first, then the HTTP session and WeCom template.
        """
        if self.setup_logging:
            setup_app_logging()
        logger = get_app_logger()

        logger.info(f"Starting WeCom edition changelog service v{settings.version}")
        logger.info(f"Environment: {settings.environment}, log level: {settings.log_level}")

        connector = aiohttp.TCPConnector(
            limit=settings.http_max_connections,
            keepalive_timeout=30,
            enable_cleanup_closed=True,
        )
        session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=settings.http_timeout),
        )
        app.state.http_session = session
        logger.info(
            f"Persistent HTTP session created - connections: "
            f"{settings.http_max_connections}, timeout: {settings.http_timeout}s"
        )

        app.state.wecom_template = WeComTemplate.from_settings(session, settings)
        if not settings.has_wecom_suite:
            logger.warning(
                "No WeCom suite configured - edition info cannot be fetched "
                "until WECOM_SUITE_ID and WECOM_SUITE_SECRET are set"
            )

    async def shutdown(self, app: FastAPI) -> None:
        """Close the HTTP session."""
        logger = get_app_logger()

        if hasattr(app.state, "wecom_template"):
            del app.state.wecom_template

        if hasattr(app.state, "http_session"):
            await app.state.http_session.close()
            del app.state.http_session
            logger.info("Persistent HTTP session closed cleanly")
