"""
WeCom (WeChat Work) third-party application integration.
"""

from .client.wecom_isv_client import WeComIsvClient
from .models.auth_models import AuthInfo, EditionAgent, EditionInfo
from .template import WeComTemplate
from .utils.error_helpers import WeComApiError

__all__ = [
    "AuthInfo",
    "EditionAgent",
    "EditionInfo",
    "WeComApiError",
    "WeComIsvClient",
    "WeComTemplate",
]
