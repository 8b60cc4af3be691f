"""Canonical model of a result bundle, independent of the schema it came from."""

from collections.abc import Sequence
from datetime import datetime
from typing import Literal, Self

from pydantic import Field, NonNegativeInt, PositiveInt, model_validator

from xcresult_check.models.base import Model

RunStatus = Literal["unknown", "succeeded", "failed"]


class SourceLocation(Model):
    """Repository-relative file and 1-based line range of an issue."""

    file: str = Field(..., description="File path with the path prefix removed")
    start_line: PositiveInt | None = Field(default=None, description="First line")
    end_line: PositiveInt | None = Field(default=None, description="Last line")


class TestFailure(Model):
    """A failed test assertion."""

    __test__ = False

    test_name: str = Field(..., description="Test case name, e.g. 'testLogin()'")
    target_name: str = Field(default="", description="Test bundle target")
    failure_text: str = Field(default="", description="Assertion message")
    source_location: SourceLocation | None = None


class BuildIssue(Model):
    """A compiler warning or error."""

    issue_type: str | None = Field(default=None, description="e.g. 'Swift Compiler'")
    message: str | None = None
    source_location: SourceLocation | None = None


class Issues(Model):
    """Issues of a run, each kind in the order xcresulttool reported them."""

    test_failures: Sequence[TestFailure] = Field(default_factory=list)
    warnings: Sequence[BuildIssue] = Field(default_factory=list)
    errors: Sequence[BuildIssue] = Field(default_factory=list)


class ActionRecord(Model):
    """One build or test action recorded in the bundle."""

    title: str | None = None
    build_status: RunStatus = "unknown"
    test_status: RunStatus = "unknown"
    destination: str | None = Field(default=None, description="Run destination")
    sdk: str | None = Field(default=None, description="e.g. 'macOS 14.2'")
    started_at: datetime | None = Field(default=None, description="UTC start")
    ended_at: datetime | None = Field(default=None, description="UTC end")

    @property
    def duration(self) -> float | None:
        """Wall-clock seconds between start and end, if both are known."""
        if self.started_at is None or self.ended_at is None:
            return None
        return (self.ended_at - self.started_at).total_seconds()


class RunMetrics(Model):
    """Counters and overall statuses of a run."""

    tests_total: NonNegativeInt = 0
    tests_failed: NonNegativeInt = 0
    warnings: NonNegativeInt = 0
    errors: NonNegativeInt = 0
    build_status: RunStatus = "unknown"
    test_status: RunStatus = "unknown"

    @model_validator(mode="after")
    def _check_failed_within_total(self) -> Self:
        if self.tests_failed > self.tests_total:
            raise ValueError(
                f"tests_failed ({self.tests_failed}) exceeds "
                f"tests_total ({self.tests_total})"
            )
        return self

    @property
    def tests_passed(self) -> int:
        """Number of tests that did not fail."""
        return max(self.tests_total - self.tests_failed, 0)


class XcResult(Model):
    """Normalized content of one result bundle.

    Built once per invocation by a schema parser and never mutated.
    """

    metrics: RunMetrics = Field(default_factory=RunMetrics)
    issues: Issues = Field(default_factory=Issues)
    actions: Sequence[ActionRecord] = Field(default_factory=list)
