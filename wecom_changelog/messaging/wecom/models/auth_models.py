"""
WeCom ISV authorization models.

Pydantic models for the ``get_suite_token`` and ``get_auth_info`` responses of
the WeCom third-party (service provider) API. Wire keys are snake_case as sent
by WeCom; edition snapshots are stored with camelCase keys.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class EditionAgent(BaseModel):
    """Paid edition of one application inside an authorized corp."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    agent_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("agentid", "agent_id", "agentId"),
        serialization_alias="agentId",
    )
    edition_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("edition_id", "editionId"),
        serialization_alias="editionId",
    )
    edition_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("edition_name", "editionName"),
        serialization_alias="editionName",
    )
    # 0: not purchased, 1: trial, 2: trial expired, 3: paid, 4: paid expired,
    # 5: not expired but over the user limit
    app_status: int | None = Field(
        default=None,
        validation_alias=AliasChoices("app_status", "appStatus"),
        serialization_alias="appStatus",
    )
    user_limit: int | None = Field(
        default=None,
        validation_alias=AliasChoices("user_limit", "userLimit"),
        serialization_alias="userLimit",
    )
    expired_time: int | None = Field(
        default=None,
        validation_alias=AliasChoices("expired_time", "expiredTime"),
        serialization_alias="expiredTime",
    )
    is_virtual_version: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("is_virtual_version", "isVirtualVersion"),
        serialization_alias="isVirtualVersion",
    )
    is_shared_from_other_corp: bool | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "is_shared_from_other_corp", "isSharedFromOtherCorp"
        ),
        serialization_alias="isSharedFromOtherCorp",
    )

    def to_snapshot(self) -> str:
        """Serialize to the compact JSON stored in the changelog."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class EditionInfo(BaseModel):
    """Edition info block of ``get_auth_info``."""

    model_config = ConfigDict(extra="ignore")

    agents: list[EditionAgent] = Field(
        default_factory=list, validation_alias=AliasChoices("agent", "agents")
    )

    @field_validator("agents", mode="before")
    @classmethod
    def _null_agents_as_empty(cls, value: Any) -> Any:
        # WeCom sends "agent": null for corps without a paid edition
        return [] if value is None else value

    def first_agent(self) -> EditionAgent | None:
        return self.agents[0] if self.agents else None


class AuthInfo(BaseModel):
    """Response of ``/cgi-bin/service/get_auth_info``."""

    model_config = ConfigDict(extra="ignore")

    auth_corp_info: dict[str, Any] = Field(default_factory=dict)
    auth_info: dict[str, Any] = Field(default_factory=dict)
    edition_info: EditionInfo | None = None

    @property
    def corp_id(self) -> str | None:
        return self.auth_corp_info.get("corpid")

    def first_edition_agent(self) -> EditionAgent | None:
        """Return the first edition agent, or None when WeCom reported none."""
        if self.edition_info is None:
            return None
        return self.edition_info.first_agent()


class SuiteAccessToken(BaseModel):
    """Response of ``/cgi-bin/service/get_suite_token``."""

    suite_access_token: str
    expires_in: int = 7200
