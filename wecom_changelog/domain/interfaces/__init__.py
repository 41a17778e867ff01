"""
Domain interfaces implemented by the persistence layer.
"""

from .changelog_repository import IEditionChangelogRepository
from .tenant_repository import ISocialTenantRepository

__all__ = [
    "IEditionChangelogRepository",
    "ISocialTenantRepository",
]
