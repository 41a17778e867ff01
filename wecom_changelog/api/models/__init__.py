from .changelog_models import ChangelogResponse, CreateChangelogRequest, SuiteTicketRequest

__all__ = ["ChangelogResponse", "CreateChangelogRequest", "SuiteTicketRequest"]
