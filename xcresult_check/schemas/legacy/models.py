"""Pydantic models for the legacy ``xcresulttool get --format json`` output.

Every scalar of this schema is wrapped as ``{"_type": {...}, "_value": ...}``
and every list as ``{"_type": {...}, "_values": [...]}``. Integers and dates
arrive as strings. Any wrapper may be missing, so every field has a default.
"""

from collections.abc import Sequence

from pydantic import Field

from xcresult_check.models.base import Count, Model


class TypedValue[T](Model):
    """A ``{"_type", "_value"}`` scalar wrapper."""

    value: T | None = Field(default=None, alias="_value")


class TypedArray[T](Model):
    """A ``{"_type", "_values"}`` list wrapper."""

    entries: Sequence[T] = Field(default_factory=list, alias="_values")


class TypedCount(Model):
    """A ``{"_type": {"_name": "Int"}, "_value": "12"}`` counter."""

    value: Count = Field(default=0, alias="_value")


class DocumentLocation(Model):
    """Location of an issue in the workspace that created the bundle."""

    url: TypedValue[str] = Field(default_factory=TypedValue[str])


class IssueSummary(Model):
    """A build warning or error."""

    issue_type: TypedValue[str] = Field(
        default_factory=TypedValue[str], alias="issueType"
    )
    message: TypedValue[str] = Field(default_factory=TypedValue[str])
    document_location: DocumentLocation | None = Field(
        default=None, alias="documentLocationInCreatingWorkspace"
    )


class TestFailureIssueSummary(IssueSummary):
    """A failed test assertion."""

    __test__ = False

    test_case_name: TypedValue[str] = Field(
        default_factory=TypedValue[str], alias="testCaseName"
    )
    producing_target: TypedValue[str] = Field(
        default_factory=TypedValue[str], alias="producingTarget"
    )


class ResultIssueSummaries(Model):
    """Issues of all actions in the invocation."""

    test_failure_summaries: TypedArray[TestFailureIssueSummary] = Field(
        default_factory=TypedArray[TestFailureIssueSummary],
        alias="testFailureSummaries",
    )
    warning_summaries: TypedArray[IssueSummary] = Field(
        default_factory=TypedArray[IssueSummary], alias="warningSummaries"
    )
    error_summaries: TypedArray[IssueSummary] = Field(
        default_factory=TypedArray[IssueSummary], alias="errorSummaries"
    )


class ResultMetrics(Model):
    """Counters of the whole invocation."""

    tests_count: TypedCount = Field(
        default_factory=TypedCount, alias="testsCount"
    )
    tests_failed_count: TypedCount = Field(
        default_factory=TypedCount, alias="testsFailedCount"
    )
    warning_count: TypedCount = Field(
        default_factory=TypedCount, alias="warningCount"
    )
    error_count: TypedCount = Field(
        default_factory=TypedCount, alias="errorCount"
    )


class ActionSDKRecord(Model):
    """SDK an action was built against."""

    name: TypedValue[str] = Field(default_factory=TypedValue[str])


class ActionRunDestinationRecord(Model):
    """Device or simulator an action ran on."""

    display_name: TypedValue[str] = Field(
        default_factory=TypedValue[str], alias="displayName"
    )
    target_sdk_record: ActionSDKRecord | None = Field(
        default=None, alias="targetSDKRecord"
    )


class ActionResult(Model):
    """Outcome of the build or test phase of an action."""

    status: TypedValue[str] = Field(default_factory=TypedValue[str])


class ActionRecord(Model):
    """One scheme action (build, test, ...) of the invocation."""

    title: TypedValue[str] = Field(default_factory=TypedValue[str])
    started_time: TypedValue[str] = Field(
        default_factory=TypedValue[str], alias="startedTime"
    )
    ended_time: TypedValue[str] = Field(
        default_factory=TypedValue[str], alias="endedTime"
    )
    run_destination: ActionRunDestinationRecord | None = Field(
        default=None, alias="runDestination"
    )
    build_result: ActionResult | None = Field(default=None, alias="buildResult")
    action_result: ActionResult | None = Field(default=None, alias="actionResult")


class ActionsInvocationRecord(Model):
    """Root object of a legacy result document."""

    metrics: ResultMetrics = Field(default_factory=ResultMetrics)
    issues: ResultIssueSummaries = Field(default_factory=ResultIssueSummaries)
    actions: TypedArray[ActionRecord] = Field(default_factory=TypedArray[ActionRecord])
