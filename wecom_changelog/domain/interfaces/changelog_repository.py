"""
Edition changelog repository interface.

Defines the contract for persisting and reading WeCom edition changelog rows.
"""

from abc import ABC, abstractmethod

from wecom_changelog.database.models import SocialEditionChangelogWecom


class IEditionChangelogRepository(ABC):
    """
    Interface for the append-only edition changelog store.
    """

    @abstractmethod
    async def insert(
        self, entity: SocialEditionChangelogWecom
    ) -> SocialEditionChangelogWecom:
        """Persist a new changelog row and return it with id and timestamps set."""
        pass

    @abstractmethod
    async def select_last_change_log(
        self, suite_id: str, paid_corp_id: str
    ) -> SocialEditionChangelogWecom | None:
        """Get the most recent changelog row for a suite and corp."""
        pass
