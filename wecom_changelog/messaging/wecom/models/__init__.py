from .auth_models import AuthInfo, EditionAgent, EditionInfo, SuiteAccessToken

__all__ = ["AuthInfo", "EditionAgent", "EditionInfo", "SuiteAccessToken"]
