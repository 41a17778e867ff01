from .edition_changelog_service import SocialEditionChangelogWeComService
from .social_tenant_service import SocialTenantService

__all__ = ["SocialEditionChangelogWeComService", "SocialTenantService"]
