"""
Edition changelog service for WeCom third-party applications.

Records a snapshot of a corp's paid edition every time WeCom notifies an
edition change, either fetched from WeCom or taken from the notification.
"""

from typing import TYPE_CHECKING

from wecom_changelog.core.logging.logger import get_logger
from wecom_changelog.database.models import SocialEditionChangelogWecom
from wecom_changelog.domain.exceptions import TenantDisabledError, TenantNotFoundError
from wecom_changelog.domain.interfaces.changelog_repository import (
    IEditionChangelogRepository,
)
from wecom_changelog.domain.services.social_tenant_service import SocialTenantService
from wecom_changelog.messaging.wecom.models.auth_models import EditionAgent

if TYPE_CHECKING:
    from wecom_changelog.messaging.wecom.template import WeComTemplate


def serialize_edition_agent(agent: EditionAgent | None) -> str | None:
    """Serialize an edition agent for storage; None stays None."""
    if agent is None:
        return None
    return agent.to_snapshot()


def _require_ids(suite_id: str, paid_corp_id: str) -> None:
    if not suite_id:
        raise ValueError("suite_id is required")
    if not paid_corp_id:
        raise ValueError("paid_corp_id is required")


class SocialEditionChangelogWeComService:
    """
    Append-only edition changelog for WeCom ISV corps.

    Collaborators:
    - changelog_repository: stores and reads changelog rows
    - tenant_service: resolves the tenant (and its permanent code)
    - wecom_template: gives the ISV client of a suite
    """

    def __init__(
        self,
        changelog_repository: IEditionChangelogRepository,
        tenant_service: SocialTenantService,
        wecom_template: "WeComTemplate | None" = None,
    ):
        self.changelog_repository = changelog_repository
        self.tenant_service = tenant_service
        self.wecom_template = wecom_template
        self.logger = get_logger(__name__)

    async def create_changelog(
        self, suite_id: str, paid_corp_id: str, fetch_edition_info: bool = True
    ) -> SocialEditionChangelogWecom:
        """Create a changelog row, optionally fetching the edition from WeCom.

        Args:
            suite_id: WeCom suite id
            paid_corp_id: Corp whose edition changed
            fetch_edition_info: Fetch the current edition from WeCom; when False
                the row is stored without edition info

        Returns:
            The stored changelog row

        Raises:
            TenantNotFoundError: If no tenant exists for the suite and corp
            TenantDisabledError: If the tenant is disabled
            WeComApiError: If WeCom rejects the authorization info call
        """
        _require_ids(suite_id, paid_corp_id)
        entity = SocialEditionChangelogWecom(suite_id=suite_id, paid_corp_id=paid_corp_id)

        if fetch_edition_info:
            tenant = await self.tenant_service.get_by_app_id_and_tenant_id(
                suite_id, paid_corp_id
            )
            if tenant is None:
                raise TenantNotFoundError(suite_id, paid_corp_id)
            if not tenant.status:
                raise TenantDisabledError(suite_id, paid_corp_id)

            if self.wecom_template is None:
                raise RuntimeError("WeCom template is required to fetch edition info")
            isv_service = self.wecom_template.isv_service(suite_id)
            auth_info = await isv_service.get_auth_info(
                paid_corp_id, tenant.permanent_code
            )
            agent = auth_info.first_edition_agent()
            if agent is None:
                self.logger.info(f"No edition agent reported for corp {paid_corp_id}")
            entity.edition_info = serialize_edition_agent(agent)

        saved = await self.changelog_repository.insert(entity)
        self.logger.info(
            f"Edition changelog {saved.id} created for suite {suite_id}, "
            f"corp {paid_corp_id}"
        )
        return saved

    async def create_changelog_from_agent(
        self,
        suite_id: str,
        paid_corp_id: str,
        edition_agent: EditionAgent | None,
    ) -> SocialEditionChangelogWecom:
        """Create a changelog row from an edition agent already at hand.

        Used when the edition came with the notification itself (for example
        the permanent code response), so WeCom is not called again.
        """
        _require_ids(suite_id, paid_corp_id)
        entity = SocialEditionChangelogWecom(
            suite_id=suite_id,
            paid_corp_id=paid_corp_id,
            edition_info=serialize_edition_agent(edition_agent),
        )
        saved = await self.changelog_repository.insert(entity)
        self.logger.info(
            f"Edition changelog {saved.id} created from agent for suite {suite_id}, "
            f"corp {paid_corp_id}"
        )
        return saved

    async def get_last_changelog(
        self, suite_id: str, paid_corp_id: str
    ) -> SocialEditionChangelogWecom | None:
        """Get the most recent changelog of a corp, or None if there is none."""
        return await self.changelog_repository.select_last_change_log(
            suite_id, paid_corp_id
        )
