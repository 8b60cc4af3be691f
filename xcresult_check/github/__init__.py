"""GitHub Checks publishing module."""

from xcresult_check.github.client import ChecksApiError, ChecksClient
from xcresult_check.github.config import ChecksConfig
from xcresult_check.github.context import GitHubContext, GitHubContextError
from xcresult_check.github.models import CheckRun, CheckRunOutput

__all__ = [
    "CheckRun",
    "CheckRunOutput",
    "ChecksApiError",
    "ChecksClient",
    "ChecksConfig",
    "GitHubContext",
    "GitHubContextError",
]
