from .health import router as health_router
from .wecom_changelog import router as wecom_changelog_router

__all__ = ["health_router", "wecom_changelog_router"]
