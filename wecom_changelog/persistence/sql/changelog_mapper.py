"""
SQL implementation of the edition changelog repository.
"""

from sqlmodel import select

from wecom_changelog.core.logging.logger import get_logger
from wecom_changelog.database.adapter import SessionFactory
from wecom_changelog.database.models import SocialEditionChangelogWecom
from wecom_changelog.domain.interfaces.changelog_repository import (
    IEditionChangelogRepository,
)


class SocialEditionChangelogWecomMapper(IEditionChangelogRepository):
    """Edition changelog rows stored through an async SQLAlchemy session."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory
        self.logger = get_logger(__name__)

    async def insert(
        self, entity: SocialEditionChangelogWecom
    ) -> SocialEditionChangelogWecom:
        async with self.session_factory() as session:
            session.add(entity)
            await session.flush()
            # Pull server defaults (created_at, updated_at) back into the entity
            await session.refresh(entity)

        self.logger.debug(
            f"Inserted edition changelog {entity.id} for suite {entity.suite_id}, "
            f"corp {entity.paid_corp_id}"
        )
        return entity

    async def select_last_change_log(
        self, suite_id: str, paid_corp_id: str
    ) -> SocialEditionChangelogWecom | None:
        statement = (
            select(SocialEditionChangelogWecom)
            .where(
                SocialEditionChangelogWecom.suite_id == suite_id,
                SocialEditionChangelogWecom.paid_corp_id == paid_corp_id,
                SocialEditionChangelogWecom.is_deleted == False,  # noqa: E712
            )
            .order_by(
                SocialEditionChangelogWecom.created_at.desc(),
                SocialEditionChangelogWecom.id.desc(),
            )
            .limit(1)
        )
        async with self.session_factory() as session:
            result = await session.execute(statement)
            return result.scalars().first()
