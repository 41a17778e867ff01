"""
Request context management using contextvars for automatic propagation.

The corp (tenant) and suite identifiers are set once by the route handling a
request and are then picked up by every logger created during that request.
"""

from contextvars import ContextVar

_tenant_context: ContextVar[str | None] = ContextVar(
    "tenant_id", default=None
)  # Paid corp id
_suite_context: ContextVar[str | None] = ContextVar(
    "suite_id", default=None
)  # WeCom suite id


def set_request_context(
    tenant_id: str | None = None,
    suite_id: str | None = None,
) -> None:
    """
    Set the request context for the current async context.

    Args:
        tenant_id: Paid corp id of the enterprise being processed
        suite_id: WeCom suite id of the third-party application
    """
    if tenant_id is not None:
        _tenant_context.set(tenant_id)
    if suite_id is not None:
        _suite_context.set(suite_id)


def get_current_tenant_context() -> str | None:
    """Get the current tenant (corp) id, or None if not set."""
    return _tenant_context.get()


def get_current_suite_context() -> str | None:
    """Get the current suite id, or None if not set."""
    return _suite_context.get()


def clear_request_context() -> None:
    """
    Clear the request context.

    Context is isolated per request already; this is mostly useful in tests.
    """
    _tenant_context.set(None)
    _suite_context.set(None)


def get_context_info() -> dict[str, str | None]:
    """Get current context information for debugging."""
    return {
        "tenant_id": get_current_tenant_context(),
        "suite_id": get_current_suite_context(),
    }
