"""Normalization of the legacy action invocation record."""

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime

from xcresult_check.errors import MalformedDocumentError
from xcresult_check.location import resolve_location
from xcresult_check.models.result import (
    ActionRecord,
    BuildIssue,
    Issues,
    RunMetrics,
    SourceLocation,
    TestFailure,
    XcResult,
)
from xcresult_check.schemas.decoding import decode_document
from xcresult_check.schemas.legacy import models
from xcresult_check.schemas.status import combine_statuses, to_run_status

INVOCATION = "invocation"

TIMESTAMP_FORMATS = ("%Y-%m-%dT%H:%M:%S.%f%z", "%Y-%m-%dT%H:%M:%S%z")


def parse_invocation_record(
    documents: Mapping[str, str], path_prefix: str = ""
) -> XcResult:
    """Build the canonical result from a legacy invocation record.

    Raises:
        MalformedDocumentError: If the record is missing or unreadable

    """
    text = documents.get(INVOCATION)
    if not text:
        raise MalformedDocumentError("Action invocation record is missing")

    record = decode_document(text, models.ActionsInvocationRecord)
    actions = [_action(action) for action in record.actions.entries]

    tests_failed = record.metrics.tests_failed_count.value
    metrics = RunMetrics(
        tests_total=max(record.metrics.tests_count.value, tests_failed),
        tests_failed=tests_failed,
        warnings=record.metrics.warning_count.value,
        errors=record.metrics.error_count.value,
        build_status=combine_statuses(a.build_status for a in actions),
        test_status=combine_statuses(a.test_status for a in actions),
    )

    issues = Issues(
        test_failures=[
            _test_failure(summary, path_prefix)
            for summary in record.issues.test_failure_summaries.entries
        ],
        warnings=_build_issues(record.issues.warning_summaries.entries, path_prefix),
        errors=_build_issues(record.issues.error_summaries.entries, path_prefix),
    )

    return XcResult(metrics=metrics, issues=issues, actions=actions)


def _location(
    summary: models.IssueSummary, path_prefix: str
) -> SourceLocation | None:
    if summary.document_location is None or not summary.document_location.url.value:
        return None
    return resolve_location(summary.document_location.url.value, path_prefix)


def _test_failure(
    summary: models.TestFailureIssueSummary, path_prefix: str
) -> TestFailure:
    return TestFailure(
        test_name=summary.test_case_name.value or "",
        target_name=summary.producing_target.value or "",
        failure_text=summary.message.value or "",
        source_location=_location(summary, path_prefix),
    )


def _build_issues(
    summaries: Sequence[models.IssueSummary], path_prefix: str
) -> list[BuildIssue]:
    return [
        BuildIssue(
            issue_type=summary.issue_type.value,
            message=summary.message.value,
            source_location=_location(summary, path_prefix),
        )
        for summary in summaries
    ]


def _action(action: models.ActionRecord) -> ActionRecord:
    destination = action.run_destination
    sdk_record = destination.target_sdk_record if destination else None
    return ActionRecord(
        title=action.title.value,
        build_status=to_run_status(
            action.build_result.status.value if action.build_result else None
        ),
        test_status=to_run_status(
            action.action_result.status.value if action.action_result else None
        ),
        destination=destination.display_name.value if destination else None,
        sdk=sdk_record.name.value if sdk_record else None,
        started_at=parse_timestamp(action.started_time.value),
        ended_at=parse_timestamp(action.ended_time.value),
    )


def parse_timestamp(raw: str | None) -> datetime | None:
    """Parse ``2024-01-10T09:15:00.000+0100`` style dates into UTC.

    Unparseable values are treated as absent.
    """
    if not raw:
        return None
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt).astimezone(UTC)
        except ValueError:
            continue
    return None
