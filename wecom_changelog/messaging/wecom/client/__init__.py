from .wecom_isv_client import WeComIsvClient, WeComUrlBuilder

__all__ = ["WeComIsvClient", "WeComUrlBuilder"]
