"""
Social tenant repository interface.
"""

from abc import ABC, abstractmethod

from wecom_changelog.database.models import SocialTenant


class ISocialTenantRepository(ABC):
    """Read access to third-party application tenants."""

    @abstractmethod
    async def select_by_app_id_and_tenant_id(
        self, app_id: str, tenant_id: str
    ) -> SocialTenant | None:
        """Get the non-deleted tenant for an app (suite) id and tenant (corp) id."""
        pass
