from .error_handler import (
    ErrorHandlerMiddleware,
    social_error_handler,
    wecom_api_error_handler,
)
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "RequestLoggingMiddleware",
    "social_error_handler",
    "wecom_api_error_handler",
]
