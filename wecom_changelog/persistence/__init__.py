"""
Persistence implementations of the domain repository interfaces.
"""

from .sql import SocialEditionChangelogWecomMapper, SocialTenantMapper

__all__ = ["SocialEditionChangelogWecomMapper", "SocialTenantMapper"]
