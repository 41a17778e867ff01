"""
Tests for the WeCom ISV client, template and auth models.

The aiohttp session is a MagicMock whose ``post`` yields canned responses.
"""

from unittest.mock import MagicMock

import aiohttp
import pytest

from conftest import CORP_ID, PERMANENT_CODE, SUITE_ID, make_http_response
from wecom_changelog.domain.exceptions import WeComSuiteNotConfiguredError
from wecom_changelog.messaging.wecom.client.wecom_isv_client import WeComIsvClient
from wecom_changelog.messaging.wecom.models.auth_models import AuthInfo, EditionAgent
from wecom_changelog.messaging.wecom.template import WeComTemplate
from wecom_changelog.messaging.wecom.utils.error_helpers import (
    ERROR_CODE_SUITE_TICKET_MISSING,
    WeComApiError,
    raise_for_errcode,
)

BASE_URL = "https://wecom.test"

TOKEN_RESPONSE = {
    "errcode": 0,
    "errmsg": "ok",
    "suite_access_token": "suite-token-1",
    "expires_in": 7200,
}

AUTH_INFO_RESPONSE = {
    "errcode": 0,
    "errmsg": "ok",
    "auth_corp_info": {"corpid": CORP_ID},
    "auth_info": {"agent": []},
    "edition_info": {
        "agent": [
            {
                "agentid": 1000012,
                "edition_id": "RLS65535",
                "edition_name": "Professional",
                "app_status": 3,
                "user_limit": 200,
                "expired_time": 1767196800,
            }
        ]
    },
}


def make_session(*responses: dict | MagicMock) -> MagicMock:
    """Session whose ``post`` answers with the given bodies or prepared responses."""
    session = MagicMock()
    session.post = MagicMock(
        side_effect=[
            r if isinstance(r, MagicMock) else make_http_response(r) for r in responses
        ]
    )
    return session


def make_client(session: MagicMock, suite_ticket: str | None = "ticket-1") -> WeComIsvClient:
    return WeComIsvClient(
        session,
        suite_id=SUITE_ID,
        suite_secret="secret",
        suite_ticket=suite_ticket,
        base_url=BASE_URL,
    )


@pytest.mark.asyncio
class TestWeComIsvClient:
    async def test_get_auth_info_fetches_token_then_auth_info(self):
        session = make_session(TOKEN_RESPONSE, AUTH_INFO_RESPONSE)
        client = make_client(session)

        auth_info = await client.get_auth_info(CORP_ID, PERMANENT_CODE)

        token_call, auth_call = session.post.call_args_list
        assert token_call.args[0] == f"{BASE_URL}/cgi-bin/service/get_suite_token"
        assert token_call.kwargs["json"] == {
            "suite_id": SUITE_ID,
            "suite_secret": "secret",
            "suite_ticket": "ticket-1",
        }
        assert auth_call.args[0] == f"{BASE_URL}/cgi-bin/service/get_auth_info"
        assert auth_call.kwargs["params"] == {"suite_access_token": "suite-token-1"}
        assert auth_call.kwargs["json"] == {
            "auth_corpid": CORP_ID,
            "permanent_code": PERMANENT_CODE,
        }
        assert auth_info.corp_id == CORP_ID
        assert auth_info.first_edition_agent().edition_id == "RLS65535"

    async def test_suite_token_is_cached(self):
        session = make_session(TOKEN_RESPONSE, AUTH_INFO_RESPONSE, AUTH_INFO_RESPONSE)
        client = make_client(session)

        await client.get_auth_info(CORP_ID, PERMANENT_CODE)
        await client.get_auth_info(CORP_ID, PERMANENT_CODE)

        assert session.post.call_count == 3
        assert client.has_valid_token

    async def test_expired_token_is_refreshed_once(self):
        expired = {"errcode": 42001, "errmsg": "suite_access_token expired"}
        refreshed = {**TOKEN_RESPONSE, "suite_access_token": "suite-token-2"}
        session = make_session(TOKEN_RESPONSE, expired, refreshed, AUTH_INFO_RESPONSE)
        client = make_client(session)

        auth_info = await client.get_auth_info(CORP_ID, PERMANENT_CODE)

        assert session.post.call_count == 4
        retry_call = session.post.call_args_list[3]
        assert retry_call.kwargs["params"] == {"suite_access_token": "suite-token-2"}
        assert auth_info.corp_id == CORP_ID

    async def test_other_errcode_raises_without_retry(self):
        invalid = {"errcode": 40084, "errmsg": "invalid permanent_code"}
        session = make_session(TOKEN_RESPONSE, invalid)
        client = make_client(session)

        with pytest.raises(WeComApiError) as exc_info:
            await client.get_auth_info(CORP_ID, PERMANENT_CODE)

        assert exc_info.value.errcode == 40084
        assert exc_info.value.operation == "get_auth_info"
        assert session.post.call_count == 2

    async def test_missing_suite_ticket_raises_before_any_request(self):
        session = make_session()
        client = make_client(session, suite_ticket=None)

        with pytest.raises(WeComApiError) as exc_info:
            await client.get_suite_access_token()

        assert exc_info.value.errcode == ERROR_CODE_SUITE_TICKET_MISSING
        session.post.assert_not_called()

    async def test_http_error_on_token_fetch_propagates_without_caching(self):
        session = make_session(make_http_response(status=503))
        client = make_client(session)

        with pytest.raises(aiohttp.ClientResponseError) as exc_info:
            await client.get_auth_info(CORP_ID, PERMANENT_CODE)

        assert exc_info.value.status == 503
        assert session.post.call_count == 1
        assert not client.has_valid_token

    async def test_http_error_on_auth_info_propagates_without_retry(self):
        session = make_session(TOKEN_RESPONSE, make_http_response(status=502))
        client = make_client(session)

        with pytest.raises(aiohttp.ClientResponseError) as exc_info:
            await client.get_auth_info(CORP_ID, PERMANENT_CODE)

        assert exc_info.value.status == 502
        assert session.post.call_count == 2

    async def test_set_suite_ticket_enables_token_fetch(self):
        session = make_session(TOKEN_RESPONSE)
        client = make_client(session, suite_ticket=None)

        client.set_suite_ticket("ticket-2")
        token = await client.get_suite_access_token()

        assert token == "suite-token-1"
        assert session.post.call_args.kwargs["json"]["suite_ticket"] == "ticket-2"


class TestWeComTemplate:
    def test_isv_service_returns_registered_client(self):
        template = WeComTemplate(MagicMock(), base_url=BASE_URL)
        client = template.register_suite(SUITE_ID, "secret")

        assert template.isv_service(SUITE_ID) is client
        assert template.suite_ids == [SUITE_ID]

    def test_unknown_suite_raises(self):
        template = WeComTemplate(MagicMock())

        with pytest.raises(WeComSuiteNotConfiguredError):
            template.isv_service("wwunknown")

    def test_update_suite_ticket(self):
        template = WeComTemplate(MagicMock())
        client = template.register_suite(SUITE_ID, "secret")

        template.update_suite_ticket(SUITE_ID, "ticket-3")

        assert client.suite_ticket == "ticket-3"

    def test_from_settings_registers_configured_suite(self):
        settings = MagicMock()
        settings.wecom_base_url = BASE_URL
        settings.has_wecom_suite = True
        settings.wecom_suite_id = SUITE_ID
        settings.wecom_suite_secret = "secret"
        settings.wecom_suite_ticket = "ticket-1"

        template = WeComTemplate.from_settings(MagicMock(), settings)

        client = template.isv_service(SUITE_ID)
        assert client.suite_ticket == "ticket-1"
        assert client.url_builder.base_url == BASE_URL


class TestAuthModels:
    def test_first_edition_agent_without_edition_info(self):
        auth_info = AuthInfo.model_validate({"auth_corp_info": {"corpid": CORP_ID}})

        assert auth_info.first_edition_agent() is None

    def test_null_agent_list_means_no_agent(self):
        auth_info = AuthInfo.model_validate(
            {"errcode": 0, "edition_info": {"agent": None}}
        )

        assert auth_info.edition_info.agents == []
        assert auth_info.first_edition_agent() is None

    def test_snapshot_uses_camel_case_keys(self):
        agent = EditionAgent.model_validate(
            AUTH_INFO_RESPONSE["edition_info"]["agent"][0]
        )

        assert agent.to_snapshot() == (
            '{"agentId":1000012,"editionId":"RLS65535","editionName":"Professional",'
            '"appStatus":3,"userLimit":200,"expiredTime":1767196800}'
        )

    def test_agent_accepts_snapshot_keys(self):
        agent = EditionAgent.model_validate({"agentId": 5, "editionName": "Basic"})

        assert agent.agent_id == 5
        assert agent.edition_name == "Basic"

    def test_raise_for_errcode_passes_on_success(self):
        raise_for_errcode({"errcode": 0, "errmsg": "ok"}, "get_auth_info")
        raise_for_errcode({"suite_access_token": "t"}, "get_suite_token")
