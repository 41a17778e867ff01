"""
Health check endpoints.
"""

import time
from typing import Any

from fastapi import APIRouter, Request

from wecom_changelog.core.config.settings import settings
from wecom_changelog.core.logging.logger import get_api_logger

logger = get_api_logger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Basic liveness check."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.version,
        "environment": settings.environment,
    }


@router.get("/health/detailed")
async def detailed_health_check(request: Request) -> dict[str, Any]:
    """
    Detailed health check with database and WeCom configuration status.
    """
    start_time = time.time()

    database: dict[str, Any] = {"healthy": False, "error": "Database not initialized"}
    adapter = getattr(request.app.state, "db_adapter", None)
    engine = getattr(request.app.state, "db_engine", None)
    if adapter is not None and engine is not None:
        database = await adapter.get_connection_info(engine)

    template = getattr(request.app.state, "wecom_template", None)
    suite_ids = template.suite_ids if template is not None else []

    is_healthy = bool(database.get("healthy"))
    detailed_data = {
        "status": "healthy" if is_healthy else "unhealthy",
        "timestamp": time.time(),
        "response_time_ms": round((time.time() - start_time) * 1000, 2),
        "application": {
            "version": settings.version,
            "environment": settings.environment,
            "log_level": settings.log_level,
        },
        "database": database,
        "wecom": {
            "base_url": settings.wecom_base_url,
            "suites": suite_ids,
        },
    }

    logger.info(f"Detailed health check completed - Status: {detailed_data['status']}")
    return detailed_data
