"""
Rich-based logger with tenant and suite context support.

Context is added as message prefixes (``[S:suite][T:corp]``) by a thin wrapper
around the standard library logger, so format strings stay simple.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from wecom_changelog.core.config.settings import settings


class CompactFormatter(logging.Formatter):
    """Shortens long module names for better readability."""

    def format(self, record):
        if record.name.startswith("wecom_changelog."):
            # wecom_changelog.domain.services.edition_changelog_service -> services.edition_changelog_service
            parts = record.name.split(".")
            if len(parts) > 2:
                record.name = ".".join(parts[-2:])

        return super().format(record)


_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "debug": "dim white",
    }
)
_console = Console(theme=_theme)


class ContextLogger:
    """
    Logger wrapper that adds tenant and suite context to messages.
    """

    def __init__(
        self,
        logger: logging.Logger,
        tenant_id: str | None = None,
        suite_id: str | None = None,
    ):
        self.logger = logger
        self.tenant_id = tenant_id or "---"
        self.suite_id = suite_id or "---"

    def _format_message(self, message: str) -> str:
        """Add context prefix to message."""
        from .context import get_current_suite_context, get_current_tenant_context

        current_tenant = get_current_tenant_context() or self.tenant_id
        current_suite = get_current_suite_context() or self.suite_id

        prefix = ""
        if current_suite and current_suite != "---":
            prefix += f"[S:{current_suite}]"
        if current_tenant and current_tenant != "---":
            prefix += f"[T:{current_tenant}]"
        return f"{prefix} {message}" if prefix else message

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(self._format_message(message), *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(self._format_message(message), *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(self._format_message(message), *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(self._format_message(message), *args, **kwargs)

    def critical(self, message: str, *args, **kwargs) -> None:
        self.logger.critical(self._format_message(message), *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self.logger.exception(self._format_message(message), *args, **kwargs)

    def bind(self, **kwargs) -> ContextLogger:
        """
        Create a new ContextLogger with additional or updated context.

        Args:
            **kwargs: ``tenant_id`` and/or ``suite_id`` to override

        Returns:
            New ContextLogger instance with updated context

        Example:
            corp_logger = logger.bind(tenant_id="wwcorp123")
        """
        new_tenant_id = kwargs.get("tenant_id", self.tenant_id)
        new_suite_id = kwargs.get("suite_id", self.suite_id)
        return ContextLogger(self.logger, tenant_id=new_tenant_id, suite_id=new_suite_id)


def setup_logging(
    *,
    level: str = "INFO",
    mode: str = "PROD",
    log_dir: str | None = None,
    console_fmt: str | None = None,
    file_fmt: str | None = None,
) -> None:
    """
    Initialize the root logger with Rich formatting.

    Parameters
    ----------
    level : str
        Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
    mode : str
        "DEV" creates daily log files + console; anything else → console only
    log_dir : str, optional
        Directory for log files (DEV mode only)
    console_fmt : str, optional
        Console format string
    file_fmt : str, optional
        File format string
    """
    lvl = level.upper()
    lvl = lvl if lvl in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

    # RichHandler already shows level and time
    console_format = console_fmt or "[%(name)s] %(message)s"
    file_format = file_fmt or "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    rich_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        show_time=True,
        show_level=True,
        markup=False,
    )
    rich_handler.setFormatter(CompactFormatter(console_format))

    handlers: list[logging.Handler] = [rich_handler]

    if mode.upper() == "DEV" and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, f"wecom_changelog_{datetime.now():%Y%m%d}.log")
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(CompactFormatter(file_format))
        handlers.append(file_handler)
        _console.print(f"[green]DEV mode:[/] console + file → {logfile}")
    else:
        _console.print(f"Logging configured for mode '{mode}'. Console only.")

    logging.basicConfig(level=lvl, handlers=handlers, force=True)

    logging.getLogger("wecom_changelog.logging").info(f"Logging initialized ({lvl})")


def setup_app_logging() -> None:
    """
    Initialize application logging.

    Called once during FastAPI application startup.
    """
    setup_logging(
        level=settings.log_level,
        mode="DEV" if settings.is_development else "PROD",
        log_dir=settings.log_dir if settings.is_development else None,
    )


def get_logger(name: str) -> ContextLogger:
    """
    Get a logger that automatically uses request context variables.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextLogger instance with automatic context from context variables
    """
    from .context import get_current_suite_context, get_current_tenant_context

    base_logger = logging.getLogger(name)
    return ContextLogger(
        base_logger,
        tenant_id=get_current_tenant_context(),
        suite_id=get_current_suite_context(),
    )


def get_app_logger() -> ContextLogger:
    """Get application logger for general app events (startup, shutdown, etc.)."""
    return get_logger("wecom_changelog.app")


def get_api_logger(name: str | None = None) -> ContextLogger:
    """Get API logger for application endpoints and controllers."""
    return get_logger(name or "wecom_changelog.api")
