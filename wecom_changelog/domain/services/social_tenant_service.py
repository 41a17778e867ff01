"""
Tenant lookup for third-party application integrations.
"""

from wecom_changelog.database.models import SocialTenant
from wecom_changelog.domain.interfaces.tenant_repository import (
    ISocialTenantRepository,
)


class SocialTenantService:
    """Service to look up the tenant record of an installed third-party app.

    Note: For WeCom ISV apps the app id IS the suite id and the tenant id
    IS the authorized corp id.
    """

    def __init__(self, tenant_repository: ISocialTenantRepository):
        self.tenant_repository = tenant_repository

    async def get_by_app_id_and_tenant_id(
        self, app_id: str, tenant_id: str
    ) -> SocialTenant | None:
        """Get a tenant by app id and tenant id.

        Args:
            app_id: Third-party app id (the WeCom suite id)
            tenant_id: Tenant id on the platform (the WeCom corp id)

        Returns:
            The tenant, or None if it does not exist or was deleted
        """
        return await self.tenant_repository.select_by_app_id_and_tenant_id(
            app_id, tenant_id
        )
