"""
WeCom error handling utilities.

WeCom answers HTTP 200 with an ``errcode``/``errmsg`` pair; a non-zero
``errcode`` is turned into ``WeComApiError`` here.
"""

from typing import Any

# WeCom API error codes
ERROR_CODE_OK = 0
ERROR_CODE_SYSTEM_BUSY = -1
# Raised locally, never returned by WeCom
ERROR_CODE_SUITE_TICKET_MISSING = -2
ERROR_CODE_INVALID_SUITE_TOKEN = 40014
ERROR_CODE_SUITE_TOKEN_EXPIRED = 42001
ERROR_CODE_SUITE_TOKEN_EXPIRED_ALT = 42009

TOKEN_EXPIRED_CODES = frozenset(
    {
        ERROR_CODE_INVALID_SUITE_TOKEN,
        ERROR_CODE_SUITE_TOKEN_EXPIRED,
        ERROR_CODE_SUITE_TOKEN_EXPIRED_ALT,
    }
)


class WeComApiError(Exception):
    """Error answered by the WeCom API (non-zero ``errcode``)."""

    def __init__(self, errcode: int, errmsg: str, operation: str | None = None):
        self.errcode = errcode
        self.errmsg = errmsg
        self.operation = operation
        prefix = f"{operation} failed: " if operation else ""
        super().__init__(f"{prefix}errcode={errcode}, errmsg={errmsg}")

    @property
    def is_token_expired(self) -> bool:
        return self.errcode in TOKEN_EXPIRED_CODES


def raise_for_errcode(response_data: dict[str, Any], operation: str) -> None:
    """Raise WeComApiError if a WeCom response carries a non-zero errcode.

    Args:
        response_data: Decoded JSON body
        operation: Human-readable name of the call for the error message

    Raises:
        WeComApiError: If ``errcode`` is present and non-zero
    """
    errcode = response_data.get("errcode", ERROR_CODE_OK)
    if errcode != ERROR_CODE_OK:
        raise WeComApiError(
            errcode=errcode,
            errmsg=response_data.get("errmsg", ""),
            operation=operation,
        )
