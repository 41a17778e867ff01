"""
Request and response models for the edition changelog API.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wecom_changelog.messaging.wecom.models.auth_models import EditionAgent


class CreateChangelogRequest(BaseModel):
    """Body of ``POST /api/wecom/changelogs``.

    When ``edition_agent`` is given it is stored as is and WeCom is not called;
    otherwise ``fetch_edition_info`` decides whether WeCom is asked for the
    current edition.
    """

    suite_id: str = Field(..., min_length=1, description="WeCom suite id")
    paid_corp_id: str = Field(..., min_length=1, description="Corp whose edition changed")
    fetch_edition_info: bool = Field(
        default=True, description="Fetch the current edition from WeCom"
    )
    edition_agent: EditionAgent | None = Field(
        default=None, description="Edition already known from the notification"
    )


class ChangelogResponse(BaseModel):
    """A stored edition changelog row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    suite_id: str
    paid_corp_id: str
    edition_info: str | None = None
    created_at: datetime | None = None


class SuiteTicketRequest(BaseModel):
    """Body of ``PUT /api/wecom/suites/{suite_id}/ticket``."""

    suite_ticket: str = Field(..., min_length=1)
