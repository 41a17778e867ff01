"""
WeCom third-party (ISV) API client.

Key Design Decisions:
- One client per suite; the suite id is the client identity
- Shared aiohttp session injected by the app lifespan
- Suite access token cached in memory until shortly before expiry
"""

import time
from typing import Any

import aiohttp

from wecom_changelog.core.config.settings import settings
from wecom_changelog.core.logging.logger import get_logger

from ..models.auth_models import AuthInfo, SuiteAccessToken
from ..utils.error_helpers import (
    ERROR_CODE_SUITE_TICKET_MISSING,
    WeComApiError,
    raise_for_errcode,
)

# Refresh the suite token this many seconds before WeCom expires it
TOKEN_EXPIRY_MARGIN = 200


class WeComUrlBuilder:
    """Builds URLs for WeCom service provider endpoints."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def get_suite_token_url(self) -> str:
        return f"{self.base_url}/cgi-bin/service/get_suite_token"

    def get_auth_info_url(self) -> str:
        return f"{self.base_url}/cgi-bin/service/get_auth_info"


class WeComIsvClient:
    """
    WeCom service provider client for a single suite.

    Example:
        client = WeComIsvClient(session, suite_id="ww123", suite_secret="...")
        client.set_suite_ticket(ticket)
        auth_info = await client.get_auth_info(corp_id, permanent_code)
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        suite_id: str,
        suite_secret: str,
        suite_ticket: str | None = None,
        base_url: str = settings.wecom_base_url,
        logger: Any | None = None,
    ):
        """Initialize the client.

        Args:
            session: Persistent aiohttp session (managed by the app lifespan)
            suite_id: WeCom suite id of the third-party application
            suite_secret: Secret of the suite
            suite_ticket: Latest suite ticket pushed by WeCom, if known
            base_url: WeCom API base URL
            logger: Pre-configured logger instance
        """
        self.session = session
        self.suite_id = suite_id
        self.suite_secret = suite_secret
        self.suite_ticket = suite_ticket
        self.url_builder = WeComUrlBuilder(base_url)
        self.logger = logger or get_logger(__name__)

        self._suite_access_token: str | None = None
        self._token_expires_at: float = 0.0

    def set_suite_ticket(self, suite_ticket: str) -> None:
        """Store the suite ticket WeCom pushes every ten minutes."""
        self.suite_ticket = suite_ticket

    def invalidate_token(self) -> None:
        self._suite_access_token = None
        self._token_expires_at = 0.0

    @property
    def has_valid_token(self) -> bool:
        return (
            self._suite_access_token is not None
            and time.monotonic() < self._token_expires_at
        )

    async def _post(
        self,
        url: str,
        payload: dict[str, Any],
        operation: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """POST JSON to WeCom and return the decoded body.

        Raises:
            aiohttp.ClientResponseError: For HTTP errors
            WeComApiError: For a non-zero errcode
        """
        self.logger.debug(f"Calling WeCom {operation} for suite {self.suite_id}")
        async with self.session.post(url, json=payload, params=params) as response:
            response.raise_for_status()
            # WeCom sometimes answers with text/plain content type
            response_data = await response.json(content_type=None)

        raise_for_errcode(response_data, operation)
        return response_data

    async def get_suite_access_token(self, force_refresh: bool = False) -> str:
        """Get the suite access token, fetching a new one when needed.

        Args:
            force_refresh: Ignore the cached token

        Returns:
            Suite access token

        Raises:
            WeComApiError: If no suite ticket is available or WeCom rejects the call
        """
        if not force_refresh and self.has_valid_token:
            return self._suite_access_token

        if not self.suite_ticket:
            raise WeComApiError(
                errcode=ERROR_CODE_SUITE_TICKET_MISSING,
                errmsg=f"suite ticket for suite {self.suite_id} has not been received",
                operation="get_suite_token",
            )

        response_data = await self._post(
            self.url_builder.get_suite_token_url(),
            {
                "suite_id": self.suite_id,
                "suite_secret": self.suite_secret,
                "suite_ticket": self.suite_ticket,
            },
            operation="get_suite_token",
        )
        token = SuiteAccessToken.model_validate(response_data)

        self._suite_access_token = token.suite_access_token
        self._token_expires_at = time.monotonic() + max(
            token.expires_in - TOKEN_EXPIRY_MARGIN, 0
        )
        self.logger.info(
            f"Suite access token refreshed for suite {self.suite_id}, "
            f"expires in {token.expires_in}s"
        )
        return self._suite_access_token

    async def _post_with_suite_token(
        self, url: str, payload: dict[str, Any], operation: str
    ) -> dict[str, Any]:
        """POST with the suite token, refreshing it once if WeCom says it expired."""
        token = await self.get_suite_access_token()
        try:
            return await self._post(
                url, payload, operation, params={"suite_access_token": token}
            )
        except WeComApiError as e:
            if not e.is_token_expired:
                raise
            self.logger.warning(
                f"Suite access token rejected ({e.errcode}), refreshing and retrying"
            )
            self.invalidate_token()
            token = await self.get_suite_access_token(force_refresh=True)
            return await self._post(
                url, payload, operation, params={"suite_access_token": token}
            )

    async def get_auth_info(self, auth_corp_id: str, permanent_code: str) -> AuthInfo:
        """Get authorization info of a corp, including its paid edition.

        Args:
            auth_corp_id: Authorized corp id
            permanent_code: Permanent code obtained when the corp installed the app

        Returns:
            Parsed authorization info

        Raises:
            WeComApiError: If WeCom rejects the call
            aiohttp.ClientResponseError: For HTTP errors
        """
        response_data = await self._post_with_suite_token(
            self.url_builder.get_auth_info_url(),
            {"auth_corpid": auth_corp_id, "permanent_code": permanent_code},
            operation="get_auth_info",
        )
        return AuthInfo.model_validate(response_data)
