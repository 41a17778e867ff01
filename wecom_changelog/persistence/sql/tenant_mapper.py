"""
SQL implementation of the social tenant repository.
"""

from sqlmodel import select

from wecom_changelog.database.adapter import SessionFactory
from wecom_changelog.database.models import SocialTenant
from wecom_changelog.domain.interfaces.tenant_repository import (
    ISocialTenantRepository,
)


class SocialTenantMapper(ISocialTenantRepository):
    """Tenant rows read through an async SQLAlchemy session."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    async def select_by_app_id_and_tenant_id(
        self, app_id: str, tenant_id: str
    ) -> SocialTenant | None:
        statement = select(SocialTenant).where(
            SocialTenant.app_id == app_id,
            SocialTenant.tenant_id == tenant_id,
            SocialTenant.is_deleted == False,  # noqa: E712
        )
        async with self.session_factory() as session:
            result = await session.execute(statement)
            return result.scalars().first()
