"""
Registry of WeCom ISV clients, one per configured suite.
"""

import aiohttp

from wecom_changelog.core.config.settings import Settings
from wecom_changelog.core.logging.logger import get_logger
from wecom_changelog.domain.exceptions import WeComSuiteNotConfiguredError

from .client.wecom_isv_client import WeComIsvClient

logger = get_logger(__name__)


class WeComTemplate:
    """Holds the ISV client of every suite the service acts for."""

    def __init__(self, session: aiohttp.ClientSession, base_url: str | None = None):
        self.session = session
        self.base_url = base_url
        self._services: dict[str, WeComIsvClient] = {}

    @classmethod
    def from_settings(
        cls, session: aiohttp.ClientSession, settings: Settings
    ) -> "WeComTemplate":
        """Build a template with the suite configured in the environment, if any."""
        template = cls(session, base_url=settings.wecom_base_url)
        if settings.has_wecom_suite:
            template.register_suite(
                settings.wecom_suite_id,
                settings.wecom_suite_secret,
                settings.wecom_suite_ticket,
            )
        return template

    def register_suite(
        self, suite_id: str, suite_secret: str, suite_ticket: str | None = None
    ) -> WeComIsvClient:
        kwargs = {"base_url": self.base_url} if self.base_url else {}
        client = WeComIsvClient(
            self.session,
            suite_id=suite_id,
            suite_secret=suite_secret,
            suite_ticket=suite_ticket,
            **kwargs,
        )
        self._services[suite_id] = client
        logger.info(f"Registered WeCom suite {suite_id}")
        return client

    def isv_service(self, suite_id: str) -> WeComIsvClient:
        """Get the ISV client of a suite.

        Raises:
            WeComSuiteNotConfiguredError: If the suite was never registered
        """
        try:
            return self._services[suite_id]
        except KeyError:
            raise WeComSuiteNotConfiguredError(suite_id) from None

    def update_suite_ticket(self, suite_id: str, suite_ticket: str) -> None:
        """Store a freshly pushed suite ticket for a registered suite."""
        self.isv_service(suite_id).set_suite_ticket(suite_ticket)
        logger.debug(f"Suite ticket updated for suite {suite_id}")

    @property
    def suite_ids(self) -> list[str]:
        return list(self._services)
