"""
Service dependency injection.

Builds the changelog service from the session factory and WeCom template the
lifespan hooks stored on ``app.state``.
"""

from fastapi import Depends, Request

from wecom_changelog.database.adapter import SessionFactory
from wecom_changelog.domain.services.edition_changelog_service import (
    SocialEditionChangelogWeComService,
)
from wecom_changelog.domain.services.social_tenant_service import SocialTenantService
from wecom_changelog.messaging.wecom.template import WeComTemplate
from wecom_changelog.persistence.sql.changelog_mapper import (
    SocialEditionChangelogWecomMapper,
)
from wecom_changelog.persistence.sql.tenant_mapper import SocialTenantMapper


async def get_session_factory(request: Request) -> SessionFactory:
    """Get the database session factory created by the DatabasePlugin.

    Raises:
        RuntimeError: If the database plugin did not start
    """
    session_factory = getattr(request.app.state, "db_session", None)
    if session_factory is None:
        raise RuntimeError("Database session factory not available on app.state")
    return session_factory


async def get_wecom_template(request: Request) -> WeComTemplate:
    """Get the WeCom template created by the CorePlugin.

    Raises:
        RuntimeError: If the core plugin did not start
    """
    template = getattr(request.app.state, "wecom_template", None)
    if template is None:
        raise RuntimeError("WeCom template not available on app.state")
    return template


async def get_tenant_service(
    session_factory: SessionFactory = Depends(get_session_factory),
) -> SocialTenantService:
    return SocialTenantService(SocialTenantMapper(session_factory))


async def get_changelog_service(
    session_factory: SessionFactory = Depends(get_session_factory),
    tenant_service: SocialTenantService = Depends(get_tenant_service),
    wecom_template: WeComTemplate = Depends(get_wecom_template),
) -> SocialEditionChangelogWeComService:
    """Get the edition changelog service wired to the app's collaborators."""
    return SocialEditionChangelogWeComService(
        changelog_repository=SocialEditionChangelogWecomMapper(session_factory),
        tenant_service=tenant_service,
        wecom_template=wecom_template,
    )
