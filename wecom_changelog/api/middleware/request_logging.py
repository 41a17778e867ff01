"""
Request and response logging middleware with tenant context.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wecom_changelog.core.config.settings import settings
from wecom_changelog.core.logging.logger import get_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every API request with its status and timing.

    Health checks and docs are skipped to reduce noise.
    """

    skip_paths = ("/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico")

    def __init__(self, app, log_requests: bool = True, log_responses: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        logger = get_logger(__name__)
        skip = request.url.path.startswith(self.skip_paths)

        if self.log_requests and not skip:
            client_host = request.client.host if request.client else "unknown"
            logger.info(f"Incoming {request.method} {request.url.path} from {client_host}")

        response = await call_next(request)
        process_time_ms = round((time.time() - start_time) * 1000, 2)

        if settings.is_development:
            response.headers["X-Process-Time"] = str(process_time_ms)

        if self.log_responses and not skip:
            status_code = response.status_code
            if status_code >= 500:
                log_level = "error"
            elif status_code >= 400:
                log_level = "warning"
            else:
                log_level = "info"
            getattr(logger, log_level)(
                f"Response {status_code} for {request.method} {request.url.path} "
                f"({process_time_ms}ms)"
            )

        return response
