"""
Database Models

SQLModel tables for WeCom third-party tenants and their edition changelog.
Timestamps are filled by database defaults.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlmodel import Field, SQLModel


def _created_at_column() -> Column:
    return Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


def _updated_at_column() -> Column:
    return Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def _is_deleted_column() -> Column:
    return Column(Boolean, server_default=text("false"), nullable=False)


# SQLite only autoincrements INTEGER primary keys
_ID_TYPE = BigInteger().with_variant(Integer(), "sqlite")


# =============================================================================
# Social Tenant Model
# =============================================================================


class SocialTenant(SQLModel, table=True):
    """
    An enterprise that installed a third-party application.

    For WeCom ISV tenants ``app_id`` is the suite id and ``tenant_id`` the
    authorized corp id.
    """

    __tablename__ = "social_tenant"
    __table_args__ = (
        UniqueConstraint("app_id", "tenant_id", name="uk_social_tenant_app_tenant"),
    )

    id: int | None = Field(
        default=None,
        sa_column=Column(_ID_TYPE, primary_key=True, autoincrement=True),
    )
    app_id: str = Field(sa_column=Column(String(64), nullable=False))
    tenant_id: str = Field(sa_column=Column(String(64), nullable=False))
    app_type: str | None = Field(default=None, sa_column=Column(String(32), nullable=True))
    auth_mode: int | None = Field(default=None, sa_column=Column(Integer, nullable=True))
    permanent_code: str | None = Field(
        default=None, sa_column=Column(String(255), nullable=True)
    )
    auth_info: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    platform: int | None = Field(default=None, sa_column=Column(Integer, nullable=True))

    # Enabled flag; a disabled tenant cannot have edition info fetched
    status: bool = Field(
        default=True,
        sa_column=Column(Boolean, server_default=text("true"), nullable=False),
    )
    is_deleted: bool = Field(default=False, sa_column=_is_deleted_column())

    created_at: datetime | None = Field(default=None, sa_column=_created_at_column())
    updated_at: datetime | None = Field(default=None, sa_column=_updated_at_column())


# =============================================================================
# Edition Changelog Model
# =============================================================================


class SocialEditionChangelogWecom(SQLModel, table=True):
    """
    Snapshot of a WeCom corp's paid edition, written on every edition change.

    Rows are append-only; the latest row for a suite and corp is the current
    edition as last seen.
    """

    __tablename__ = "social_edition_changelog_wecom"
    __table_args__ = (
        Index("idx_edition_changelog_suite_corp", "suite_id", "paid_corp_id"),
    )

    id: int | None = Field(
        default=None,
        sa_column=Column(_ID_TYPE, primary_key=True, autoincrement=True),
    )
    suite_id: str = Field(sa_column=Column(String(64), nullable=False))
    paid_corp_id: str = Field(sa_column=Column(String(64), nullable=False))

    # JSON of the first edition agent, NULL when the platform reported none
    edition_info: str | None = Field(default=None, sa_column=Column(Text, nullable=True))

    is_deleted: bool = Field(default=False, sa_column=_is_deleted_column())
    created_at: datetime | None = Field(default=None, sa_column=_created_at_column())
    updated_at: datetime | None = Field(default=None, sa_column=_updated_at_column())


ALL_MODELS: list[type[SQLModel]] = [SocialTenant, SocialEditionChangelogWecom]
