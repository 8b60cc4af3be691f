"""GitHub Actions run context read from the runner environment."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import SecretStr

from xcresult_check.models.base import Model

log = logging.getLogger(__name__)

PULL_REQUEST_EVENTS = frozenset(
    {"pull_request", "pull_request_review", "pull_request_review_comment"}
)


class GitHubContextError(Exception):
    """Raised when the environment lacks a required GitHub Actions variable."""


class GitHubContext(Model):
    """Repository, commit and credentials of the current workflow run."""

    repository: str
    sha: str
    token: SecretStr
    event_name: str = ""
    api_url: str = "https://api.github.com"

    @property
    def owner(self) -> str:
        """Repository owner."""
        return self.repository.partition("/")[0]

    @property
    def repo(self) -> str:
        """Repository name without owner."""
        return self.repository.partition("/")[2]

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "GitHubContext":
        """Read the context of the running workflow.

        For pull request events the check is attached to the head commit of
        the pull request rather than the merge commit in ``GITHUB_SHA``.

        Raises:
            GitHubContextError: If repository, commit or token is missing

        """
        repository = environ.get("GITHUB_REPOSITORY", "")
        if "/" not in repository:
            raise GitHubContextError(
                f"GITHUB_REPOSITORY must be 'owner/repo', got '{repository}'"
            )

        token = environ.get("INPUT_TOKEN") or environ.get("GITHUB_TOKEN")
        if not token:
            raise GitHubContextError("Neither INPUT_TOKEN nor GITHUB_TOKEN is set")

        event_name = environ.get("GITHUB_EVENT_NAME", "")
        sha = environ.get("GITHUB_SHA", "")
        if event_name in PULL_REQUEST_EVENTS and (
            event_path := environ.get("GITHUB_EVENT_PATH")
        ):
            sha = pull_request_head_sha(read_event(Path(event_path))) or sha

        if not sha:
            raise GitHubContextError("GITHUB_SHA is not set")

        return cls(
            repository=repository,
            sha=sha,
            token=SecretStr(token),
            event_name=event_name,
            api_url=environ.get("GITHUB_API_URL") or "https://api.github.com",
        )


def read_event(event_path: Path) -> Mapping[str, Any]:
    """Load the webhook payload that triggered the workflow.

    A missing or unreadable payload is logged and treated as empty.
    """
    try:
        payload = json.loads(event_path.read_text())
    except (OSError, ValueError) as e:
        log.warning("Cannot read event payload %s: %s", event_path, e)
        return {}
    return payload if isinstance(payload, dict) else {}


def pull_request_head_sha(event: Mapping[str, Any]) -> str | None:
    """Head commit of the pull request in an event payload, if any."""
    pull_request = event.get("pull_request")
    if not isinstance(pull_request, dict):
        return None
    head = pull_request.get("head")
    if not isinstance(head, dict):
        return None
    sha = head.get("sha")
    return sha if isinstance(sha, str) and sha else None
