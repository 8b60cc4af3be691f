"""Pydantic models for GitHub Checks API requests and responses."""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from xcresult_check.models.annotation import GitHubAnnotation


class CheckRunOutput(BaseModel):
    """The ``output`` object of a check run."""

    title: str
    summary: str
    annotations: Sequence[GitHubAnnotation] = Field(default_factory=list)


class CheckRun(BaseModel):
    """A check run from the GitHub Checks API."""

    id: int
    name: str
    head_sha: str
    status: str
    conclusion: str | None = None
    html_url: str
