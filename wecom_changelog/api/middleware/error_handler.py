"""
Global error handling with tenant-aware logging.

Business errors (SocialError) and WeCom API errors are turned into structured
JSON responses by exception handlers; anything else is caught by the
middleware and answered with a 500.
"""

import time
import traceback
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wecom_changelog.core.config.settings import settings
from wecom_changelog.core.logging.logger import get_logger
from wecom_changelog.domain.exceptions import SocialError
from wecom_changelog.messaging.wecom.utils.error_helpers import WeComApiError


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Catches unhandled exceptions and answers with a structured 500 response
    without exposing internals in production.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)

        except HTTPException as http_exc:
            get_logger(__name__).warning(
                f"HTTP {http_exc.status_code} - {request.method} {request.url.path} - "
                f"Detail: {http_exc.detail}"
            )
            raise

        except Exception as exc:
            return self._handle_unexpected_exception(request, exc)

    def _handle_unexpected_exception(
        self, request: Request, exc: Exception
    ) -> JSONResponse:
        get_logger(__name__).error(
            f"Unhandled exception in {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )

        error_response: dict[str, Any] = {
            "detail": "Internal server error",
            "type": "internal_error",
            "timestamp": time.time(),
        }

        if settings.is_development:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "traceback": traceback.format_exc().split("\n"),
            }

        return JSONResponse(status_code=500, content=error_response)


async def social_error_handler(request: Request, exc: SocialError) -> JSONResponse:
    """Translate a business error into its HTTP status and code."""
    get_logger(__name__).warning(
        f"{exc.code.value} - {request.method} {request.url.path} - {exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "code": exc.code.value,
            "type": "social_error",
        },
    )


async def wecom_api_error_handler(request: Request, exc: WeComApiError) -> JSONResponse:
    """Translate a WeCom API failure into a 502 Bad Gateway."""
    get_logger(__name__).error(
        f"WeCom API error in {request.method} {request.url.path}: {exc}"
    )
    return JSONResponse(
        status_code=502,
        content={
            "detail": "WeCom API request failed",
            "type": "wecom_error",
            "errcode": exc.errcode,
            "errmsg": exc.errmsg,
        },
    )
