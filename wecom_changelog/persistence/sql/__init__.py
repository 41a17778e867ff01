from .changelog_mapper import SocialEditionChangelogWecomMapper
from .tenant_mapper import SocialTenantMapper

__all__ = ["SocialEditionChangelogWecomMapper", "SocialTenantMapper"]
