from .service_dependencies import (
    get_changelog_service,
    get_session_factory,
    get_tenant_service,
    get_wecom_template,
)

__all__ = [
    "get_changelog_service",
    "get_session_factory",
    "get_tenant_service",
    "get_wecom_template",
]
