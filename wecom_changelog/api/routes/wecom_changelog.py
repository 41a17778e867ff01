"""
WeCom edition changelog endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from wecom_changelog.api.dependencies.service_dependencies import (
    get_changelog_service,
    get_wecom_template,
)
from wecom_changelog.api.models.changelog_models import (
    ChangelogResponse,
    CreateChangelogRequest,
    SuiteTicketRequest,
)
from wecom_changelog.core.logging.context import set_request_context
from wecom_changelog.core.logging.logger import get_api_logger
from wecom_changelog.domain.services.edition_changelog_service import (
    SocialEditionChangelogWeComService,
)
from wecom_changelog.messaging.wecom.template import WeComTemplate

logger = get_api_logger(__name__)
router = APIRouter(prefix="/api/wecom", tags=["WeCom Edition Changelog"])


@router.post(
    "/changelogs",
    response_model=ChangelogResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_changelog(
    body: CreateChangelogRequest,
    service: SocialEditionChangelogWeComService = Depends(get_changelog_service),
) -> ChangelogResponse:
    """
    Record an edition change of a corp.

    Uses the given edition agent when present, otherwise fetches the edition
    from WeCom unless ``fetch_edition_info`` is false.
    """
    set_request_context(tenant_id=body.paid_corp_id, suite_id=body.suite_id)

    if body.edition_agent is not None:
        changelog = await service.create_changelog_from_agent(
            body.suite_id, body.paid_corp_id, body.edition_agent
        )
    else:
        changelog = await service.create_changelog(
            body.suite_id, body.paid_corp_id, body.fetch_edition_info
        )
    return ChangelogResponse.model_validate(changelog)


@router.get("/changelogs/latest", response_model=ChangelogResponse)
async def get_last_changelog(
    suite_id: str = Query(..., min_length=1),
    paid_corp_id: str = Query(..., min_length=1),
    service: SocialEditionChangelogWeComService = Depends(get_changelog_service),
) -> ChangelogResponse:
    """Get the most recent edition changelog of a corp."""
    set_request_context(tenant_id=paid_corp_id, suite_id=suite_id)

    changelog = await service.get_last_changelog(suite_id, paid_corp_id)
    if changelog is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "code": "CHANGELOG_NOT_FOUND",
                "message": f"No edition changelog for corp {paid_corp_id}",
            },
        )
    return ChangelogResponse.model_validate(changelog)


@router.put("/suites/{suite_id}/ticket", status_code=status.HTTP_204_NO_CONTENT)
async def update_suite_ticket(
    suite_id: str,
    body: SuiteTicketRequest,
    template: WeComTemplate = Depends(get_wecom_template),
) -> Response:
    """Store the latest suite ticket pushed by WeCom for a registered suite."""
    set_request_context(suite_id=suite_id)
    template.update_suite_ticket(suite_id, body.suite_ticket)
    logger.info(f"Suite ticket received for suite {suite_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
