"""
Business exceptions raised by the social integration services.

Each error carries a stable ``code`` and the HTTP status the API layer
answers with.
"""

from enum import Enum


class SocialErrorCode(str, Enum):
    """Stable error codes exposed to API clients."""

    TENANT_NOT_EXIST = "TENANT_NOT_EXIST"
    TENANT_DISABLED = "TENANT_DISABLED"
    SUITE_NOT_CONFIGURED = "SUITE_NOT_CONFIGURED"


class SocialError(Exception):
    """Base exception for social integration business errors."""

    status_code: int = 400

    def __init__(self, message: str, code: SocialErrorCode):
        self.message = message
        self.code = code
        super().__init__(message)


class TenantNotFoundError(SocialError):
    """Raised when no tenant record exists for a suite and corp."""

    status_code = 404

    def __init__(self, app_id: str, tenant_id: str):
        self.app_id = app_id
        self.tenant_id = tenant_id
        super().__init__(
            f"Tenant '{tenant_id}' does not exist for app '{app_id}'",
            SocialErrorCode.TENANT_NOT_EXIST,
        )


class TenantDisabledError(SocialError):
    """Raised when the tenant record exists but is disabled."""

    status_code = 403

    def __init__(self, app_id: str, tenant_id: str):
        self.app_id = app_id
        self.tenant_id = tenant_id
        super().__init__(
            f"Tenant '{tenant_id}' is disabled for app '{app_id}'",
            SocialErrorCode.TENANT_DISABLED,
        )


class WeComSuiteNotConfiguredError(SocialError):
    """Raised when no ISV client is registered for a suite id."""

    status_code = 400

    def __init__(self, suite_id: str):
        self.suite_id = suite_id
        super().__init__(
            f"WeCom suite '{suite_id}' is not configured",
            SocialErrorCode.SUITE_NOT_CONFIGURED,
        )
