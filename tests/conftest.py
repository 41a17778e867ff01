"""
Pytest configuration and common fixtures for the edition changelog tests.

Provides a temporary SQLite database, session factories, tenant seeding and
WeCom doubles.
"""

import asyncio
import os
import tempfile
from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
import pytest_asyncio

from wecom_changelog.database.adapters.sqlite_adapter import SQLiteAdapter
from wecom_changelog.database.models import ALL_MODELS, SocialTenant
from wecom_changelog.messaging.wecom.models.auth_models import AuthInfo

SUITE_ID = "wwsuite0001"
CORP_ID = "wwcorp0001"
PERMANENT_CODE = "permanent-code-0001"


@pytest.fixture
def temp_db() -> Generator[str, None, None]:
    """Create a temporary SQLite database URL for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp:
        db_path = tmp.name

    yield f"sqlite+aiosqlite:///{db_path}"

    try:
        os.unlink(db_path)
    except OSError:
        pass


@pytest_asyncio.fixture
async def session_factory(temp_db: str) -> AsyncGenerator:
    """Session factory over a fresh schema."""
    adapter = SQLiteAdapter()
    engine = await adapter.create_engine(temp_db)
    await adapter.initialize_schema(engine, ALL_MODELS)
    factory = await adapter.create_session_factory(engine)

    yield factory

    await engine.dispose()


async def insert_tenant(session_factory, **overrides) -> SocialTenant:
    values = {
        "app_id": SUITE_ID,
        "tenant_id": CORP_ID,
        "app_type": "ISV",
        "permanent_code": PERMANENT_CODE,
        "status": True,
    }
    values.update(overrides)
    tenant = SocialTenant(**values)
    async with session_factory() as session:
        session.add(tenant)
    return tenant


def seed_tenant(database_url: str, **overrides) -> None:
    """Create the schema and a tenant row from synchronous code."""

    async def _seed():
        adapter = SQLiteAdapter()
        engine = await adapter.create_engine(database_url)
        try:
            await adapter.initialize_schema(engine, ALL_MODELS)
            factory = await adapter.create_session_factory(engine)
            await insert_tenant(factory, **overrides)
        finally:
            await engine.dispose()

    asyncio.run(_seed())


def make_auth_info(agents: list[dict] | None = None, with_edition: bool = True) -> AuthInfo:
    payload = {
        "errcode": 0,
        "errmsg": "ok",
        "auth_corp_info": {"corpid": CORP_ID, "corp_name": "Test Corp"},
        "auth_info": {"agent": [{"agentid": 1000012, "name": "Vika"}]},
    }
    if with_edition:
        payload["edition_info"] = {"agent": agents or []}
    return AuthInfo.model_validate(payload)


@pytest.fixture
def paid_agent_payload() -> dict:
    return {
        "agentid": 1000012,
        "edition_id": "RLS65535",
        "edition_name": "Professional",
        "app_status": 3,
        "user_limit": 200,
        "expired_time": 1767196800,
        "is_virtual_version": False,
        "is_shared_from_other_corp": False,
    }


@pytest.fixture
def isv_client() -> MagicMock:
    """ISV client double whose get_auth_info is an AsyncMock."""
    client = MagicMock()
    client.get_auth_info = AsyncMock(return_value=make_auth_info())
    return client


@pytest.fixture
def wecom_template(isv_client: MagicMock) -> MagicMock:
    template = MagicMock()
    template.isv_service = MagicMock(return_value=isv_client)
    template.suite_ids = [SUITE_ID]
    return template


def make_http_error(status: int) -> aiohttp.ClientResponseError:
    return aiohttp.ClientResponseError(
        request_info=MagicMock(), history=(), status=status, message="Bad Gateway"
    )


def make_http_response(data: dict | None = None, status: int = 200) -> MagicMock:
    """aiohttp ``session.post(...)`` context manager answering ``data``.

    A status of 400 or above makes ``raise_for_status`` raise.
    """
    response = MagicMock()
    response.status = status
    response.raise_for_status = MagicMock(
        side_effect=make_http_error(status) if status >= 400 else None
    )
    response.json = AsyncMock(return_value=data or {})

    context_manager = MagicMock()
    context_manager.__aenter__ = AsyncMock(return_value=response)
    context_manager.__aexit__ = AsyncMock(return_value=False)
    return context_manager
