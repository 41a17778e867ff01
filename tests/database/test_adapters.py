"""
Tests for adapter selection and PostgreSQL URL handling.

No database server is needed; engines are created lazily.
"""

import pytest

from wecom_changelog.database import PostgreSQLAdapter, SQLiteAdapter, create_adapter


class TestCreateAdapter:
    @pytest.mark.parametrize(
        "url",
        [
            "postgresql://user:pw@localhost:5432/wecom",
            "postgresql+asyncpg://user:pw@localhost:5432/wecom",
            "postgres://user:pw@localhost/wecom",
        ],
    )
    def test_postgres_urls_pick_postgresql_adapter(self, url):
        assert isinstance(create_adapter(url), PostgreSQLAdapter)

    def test_sqlite_url_picks_sqlite_adapter(self):
        assert isinstance(create_adapter("sqlite+aiosqlite:///./x.db"), SQLiteAdapter)

    def test_unknown_scheme_raises(self):
        with pytest.raises(ValueError, match="mysql"):
            create_adapter("mysql://localhost/wecom")


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "url,expected",
        [
            (
                "postgresql+asyncpg://u:p@db:5432/wecom",
                "postgresql+asyncpg://u:p@db:5432/wecom",
            ),
            ("postgresql://u:p@db:5432/wecom", "postgresql+asyncpg://u:p@db:5432/wecom"),
            ("postgres://u:p@db/wecom", "postgresql+asyncpg://u:p@db/wecom"),
            ("postgres+asyncpg://u:p@db/wecom", "postgresql+asyncpg://u:p@db/wecom"),
        ],
    )
    def test_rewrites_to_asyncpg_driver(self, url, expected):
        assert PostgreSQLAdapter.normalize_url(url) == expected

    def test_only_the_scheme_is_rewritten(self):
        url = "postgresql://u:p@db/postgresql://weird"

        assert (
            PostgreSQLAdapter.normalize_url(url)
            == "postgresql+asyncpg://u:p@db/postgresql://weird"
        )

    @pytest.mark.parametrize(
        "url", ["sqlite+aiosqlite:///x.db", "postgresql+psycopg2://u@db/wecom"]
    )
    def test_non_asyncpg_url_raises(self, url):
        with pytest.raises(ValueError, match="postgresql\\+asyncpg"):
            PostgreSQLAdapter.normalize_url(url)

    @pytest.mark.asyncio
    async def test_create_engine_uses_asyncpg_dialect(self):
        engine = await PostgreSQLAdapter().create_engine("postgres://u:p@db:5432/wecom")
        try:
            assert engine.dialect.name == "postgresql"
            assert engine.dialect.driver == "asyncpg"
            assert engine.url.database == "wecom"
        finally:
            await engine.dispose()
