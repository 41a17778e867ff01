"""
Tests for the edition changelog service.

The service runs against real SQLite mappers; WeCom is replaced by an
AsyncMock ISV client.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import CORP_ID, PERMANENT_CODE, SUITE_ID, insert_tenant, make_auth_info
from wecom_changelog.domain.exceptions import (
    SocialErrorCode,
    TenantDisabledError,
    TenantNotFoundError,
    WeComSuiteNotConfiguredError,
)
from wecom_changelog.domain.services.edition_changelog_service import (
    SocialEditionChangelogWeComService,
    serialize_edition_agent,
)
from wecom_changelog.domain.services.social_tenant_service import SocialTenantService
from wecom_changelog.messaging.wecom.models.auth_models import AuthInfo, EditionAgent
from wecom_changelog.messaging.wecom.utils.error_helpers import WeComApiError
from wecom_changelog.persistence.sql.changelog_mapper import (
    SocialEditionChangelogWecomMapper,
)
from wecom_changelog.persistence.sql.tenant_mapper import SocialTenantMapper


@pytest.fixture
def service(session_factory, wecom_template) -> SocialEditionChangelogWeComService:
    return SocialEditionChangelogWeComService(
        changelog_repository=SocialEditionChangelogWecomMapper(session_factory),
        tenant_service=SocialTenantService(SocialTenantMapper(session_factory)),
        wecom_template=wecom_template,
    )


@pytest.mark.asyncio
class TestCreateChangelogWithFetch:
    """create_changelog with fetch_edition_info=True."""

    async def test_stores_first_agent_of_fetched_edition(
        self, service, session_factory, isv_client, wecom_template, paid_agent_payload
    ):
        await insert_tenant(session_factory)
        trial_agent = {"agentid": 1000013, "edition_name": "Trial", "app_status": 1}
        isv_client.get_auth_info.return_value = make_auth_info(
            [paid_agent_payload, trial_agent]
        )

        changelog = await service.create_changelog(SUITE_ID, CORP_ID)

        wecom_template.isv_service.assert_called_once_with(SUITE_ID)
        isv_client.get_auth_info.assert_awaited_once_with(CORP_ID, PERMANENT_CODE)
        assert changelog.id is not None
        assert changelog.created_at is not None
        assert changelog.suite_id == SUITE_ID
        assert changelog.paid_corp_id == CORP_ID
        assert json.loads(changelog.edition_info) == {
            "agentId": 1000012,
            "editionId": "RLS65535",
            "editionName": "Professional",
            "appStatus": 3,
            "userLimit": 200,
            "expiredTime": 1767196800,
            "isVirtualVersion": False,
            "isSharedFromOtherCorp": False,
        }

    async def test_stores_null_when_agent_list_is_empty(
        self, service, session_factory, isv_client
    ):
        await insert_tenant(session_factory)
        isv_client.get_auth_info.return_value = make_auth_info([])

        changelog = await service.create_changelog(SUITE_ID, CORP_ID)

        assert changelog.id is not None
        assert changelog.edition_info is None

    async def test_stores_null_when_edition_info_is_absent(
        self, service, session_factory, isv_client
    ):
        await insert_tenant(session_factory)
        isv_client.get_auth_info.return_value = make_auth_info(with_edition=False)

        changelog = await service.create_changelog(SUITE_ID, CORP_ID)

        assert changelog.edition_info is None

    async def test_stores_null_when_agent_list_is_null(
        self, service, session_factory, isv_client
    ):
        await insert_tenant(session_factory)
        isv_client.get_auth_info.return_value = AuthInfo.model_validate(
            {"errcode": 0, "edition_info": {"agent": None}}
        )

        changelog = await service.create_changelog(SUITE_ID, CORP_ID)

        assert changelog.id is not None
        assert changelog.edition_info is None

    async def test_missing_tenant_raises_and_stores_nothing(
        self, service, isv_client
    ):
        with pytest.raises(TenantNotFoundError) as exc_info:
            await service.create_changelog(SUITE_ID, CORP_ID)

        assert exc_info.value.code is SocialErrorCode.TENANT_NOT_EXIST
        isv_client.get_auth_info.assert_not_awaited()
        assert await service.get_last_changelog(SUITE_ID, CORP_ID) is None

    async def test_deleted_tenant_counts_as_missing(self, service, session_factory):
        await insert_tenant(session_factory, is_deleted=True)

        with pytest.raises(TenantNotFoundError):
            await service.create_changelog(SUITE_ID, CORP_ID)

    async def test_tenant_of_other_suite_counts_as_missing(
        self, service, session_factory
    ):
        await insert_tenant(session_factory, app_id="wwothersuite")

        with pytest.raises(TenantNotFoundError):
            await service.create_changelog(SUITE_ID, CORP_ID)

    async def test_disabled_tenant_raises(self, service, session_factory, isv_client):
        await insert_tenant(session_factory, status=False)

        with pytest.raises(TenantDisabledError) as exc_info:
            await service.create_changelog(SUITE_ID, CORP_ID)

        assert exc_info.value.code is SocialErrorCode.TENANT_DISABLED
        assert exc_info.value.status_code == 403
        isv_client.get_auth_info.assert_not_awaited()

    async def test_wecom_error_propagates_and_stores_nothing(
        self, service, session_factory, isv_client
    ):
        await insert_tenant(session_factory)
        isv_client.get_auth_info.side_effect = WeComApiError(
            40084, "invalid permanent_code", operation="get_auth_info"
        )

        with pytest.raises(WeComApiError) as exc_info:
            await service.create_changelog(SUITE_ID, CORP_ID)

        assert exc_info.value.errcode == 40084
        assert await service.get_last_changelog(SUITE_ID, CORP_ID) is None

    async def test_unconfigured_suite_propagates(
        self, service, session_factory, wecom_template
    ):
        await insert_tenant(session_factory)
        wecom_template.isv_service.side_effect = WeComSuiteNotConfiguredError(SUITE_ID)

        with pytest.raises(WeComSuiteNotConfiguredError):
            await service.create_changelog(SUITE_ID, CORP_ID)


@pytest.mark.asyncio
class TestCreateChangelogWithoutFetch:
    async def test_skips_tenant_and_wecom(self, session_factory, wecom_template):
        tenant_service = MagicMock()
        tenant_service.get_by_app_id_and_tenant_id = AsyncMock()
        service = SocialEditionChangelogWeComService(
            SocialEditionChangelogWecomMapper(session_factory),
            tenant_service,
            wecom_template,
        )

        changelog = await service.create_changelog(
            SUITE_ID, CORP_ID, fetch_edition_info=False
        )

        assert changelog.id is not None
        assert changelog.edition_info is None
        tenant_service.get_by_app_id_and_tenant_id.assert_not_awaited()
        wecom_template.isv_service.assert_not_called()

    async def test_works_without_template(self, session_factory):
        service = SocialEditionChangelogWeComService(
            SocialEditionChangelogWecomMapper(session_factory),
            SocialTenantService(SocialTenantMapper(session_factory)),
        )

        changelog = await service.create_changelog(
            SUITE_ID, CORP_ID, fetch_edition_info=False
        )

        assert changelog.paid_corp_id == CORP_ID

    @pytest.mark.parametrize("suite_id,corp_id", [("", CORP_ID), (SUITE_ID, "")])
    async def test_empty_ids_are_rejected(self, service, suite_id, corp_id):
        with pytest.raises(ValueError):
            await service.create_changelog(suite_id, corp_id, fetch_edition_info=False)


@pytest.mark.asyncio
class TestCreateChangelogFromAgent:
    async def test_stores_given_agent(self, service, isv_client, paid_agent_payload):
        agent = EditionAgent.model_validate(paid_agent_payload)

        changelog = await service.create_changelog_from_agent(SUITE_ID, CORP_ID, agent)

        isv_client.get_auth_info.assert_not_awaited()
        assert json.loads(changelog.edition_info)["editionId"] == "RLS65535"

    async def test_no_tenant_needed(self, service):
        # No tenant row exists; the direct variant never looks one up
        changelog = await service.create_changelog_from_agent(
            SUITE_ID, CORP_ID, EditionAgent(agent_id=1, app_status=1)
        )

        assert changelog.id is not None

    async def test_none_agent_stores_null(self, service):
        changelog = await service.create_changelog_from_agent(SUITE_ID, CORP_ID, None)

        assert changelog.edition_info is None


@pytest.mark.asyncio
class TestGetLastChangelog:
    async def test_returns_none_when_empty(self, service):
        assert await service.get_last_changelog(SUITE_ID, CORP_ID) is None

    async def test_returns_most_recent_insert(self, service):
        await service.create_changelog_from_agent(
            SUITE_ID, CORP_ID, EditionAgent(edition_name="Trial")
        )
        latest = await service.create_changelog_from_agent(
            SUITE_ID, CORP_ID, EditionAgent(edition_name="Professional")
        )

        found = await service.get_last_changelog(SUITE_ID, CORP_ID)

        assert found.id == latest.id
        assert json.loads(found.edition_info) == {"editionName": "Professional"}

    async def test_is_scoped_to_suite_and_corp(self, service):
        mine = await service.create_changelog(SUITE_ID, CORP_ID, fetch_edition_info=False)
        await service.create_changelog("wwothersuite", CORP_ID, fetch_edition_info=False)
        await service.create_changelog(SUITE_ID, "wwothercorp", fetch_edition_info=False)

        found = await service.get_last_changelog(SUITE_ID, CORP_ID)

        assert found.id == mine.id


def test_serialize_edition_agent_none():
    assert serialize_edition_agent(None) is None


def test_serialize_edition_agent_omits_missing_fields():
    agent = EditionAgent.model_validate({"agentid": 7, "app_status": 2})

    assert serialize_edition_agent(agent) == '{"agentId":7,"appStatus":2}'
