from .error_helpers import WeComApiError, raise_for_errcode

__all__ = ["WeComApiError", "raise_for_errcode"]
