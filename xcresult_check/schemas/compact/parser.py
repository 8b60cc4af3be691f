"""Normalization of compact build and test result documents."""

from collections.abc import Iterator, Mapping, Sequence
from datetime import UTC, datetime

from pydantic import BaseModel

from xcresult_check.errors import MalformedDocumentError
from xcresult_check.location import parse_failure_message, resolve_location
from xcresult_check.models.result import (
    ActionRecord,
    BuildIssue,
    Issues,
    RunMetrics,
    TestFailure,
    XcResult,
)
from xcresult_check.schemas.compact import models
from xcresult_check.schemas.decoding import decode_document
from xcresult_check.schemas.status import to_run_status

BUILD_RESULTS = "build-results"
TEST_SUMMARY = "test-summary"
TEST_DETAILS = "test-details"

TEST_BUNDLE_NODE_TYPES = frozenset({"Unit test bundle", "UI test bundle"})
TEST_CASE_NODE_TYPE = "Test Case"
FAILURE_MESSAGE_NODE_TYPE = "Failure Message"


def parse_compact_documents(
    documents: Mapping[str, str], path_prefix: str = ""
) -> XcResult:
    """Build the canonical result from the compact documents that loaded.

    Each document is optional; an undecodable one is treated like a missing
    one so that the others still produce a result.

    Raises:
        MalformedDocumentError: If none of the documents can be decoded

    """
    build = _decode_optional(documents.get(BUILD_RESULTS), models.BuildResults)
    summary = _decode_optional(documents.get(TEST_SUMMARY), models.TestSummary)
    details = _decode_optional(documents.get(TEST_DETAILS), models.TestDetails)

    if build is None and summary is None and details is None:
        raise MalformedDocumentError(
            "None of the compact result documents could be decoded"
        )

    tests_failed = summary.failed_tests if summary else 0
    metrics = RunMetrics(
        tests_total=max(summary.total_test_count if summary else 0, tests_failed),
        tests_failed=tests_failed,
        warnings=build.warning_count if build else 0,
        errors=build.error_count if build else 0,
        build_status=to_run_status(build.status if build else None),
        test_status=to_run_status(summary.result if summary else None),
    )

    if details is not None:
        test_failures = list(_detailed_test_failures(details.test_nodes, path_prefix))
    elif summary is not None:
        test_failures = [
            TestFailure(
                test_name=failure.test_name or failure.test_identifier_string or "",
                target_name=failure.target_name or "",
                failure_text=failure.failure_text or "",
            )
            for failure in summary.test_failures
        ]
    else:
        test_failures = []

    issues = Issues(
        test_failures=test_failures,
        warnings=_build_issues(build.warnings, path_prefix) if build else [],
        errors=_build_issues(build.errors, path_prefix) if build else [],
    )

    actions = [] if build is None and summary is None else [_action(build, summary)]

    return XcResult(metrics=metrics, issues=issues, actions=actions)


def _decode_optional[M: BaseModel](
    text: str | None, model_cls: type[M]
) -> M | None:
    if not text:
        return None
    try:
        return decode_document(text, model_cls)
    except MalformedDocumentError:
        return None


def _build_issues(
    issues: Sequence[models.Issue], path_prefix: str
) -> list[BuildIssue]:
    return [
        BuildIssue(
            issue_type=issue.issue_type,
            message=issue.message,
            source_location=(
                resolve_location(issue.source_url, path_prefix)
                if issue.source_url
                else None
            ),
        )
        for issue in issues
    ]


def _detailed_test_failures(
    nodes: Sequence[models.TestNode], path_prefix: str, target_name: str = ""
) -> Iterator[TestFailure]:
    """Walk the test tree depth-first, yielding failures in report order.

    The nearest enclosing test bundle names the target of a failure.
    """
    for node in nodes:
        current_target = (
            node.name if node.node_type in TEST_BUNDLE_NODE_TYPES else target_name
        )

        if (
            node.node_type == TEST_CASE_NODE_TYPE
            and to_run_status(node.result) == "failed"
        ):
            for child in node.children:
                if child.node_type != FAILURE_MESSAGE_NODE_TYPE:
                    continue
                location, text = parse_failure_message(child.name, path_prefix)
                yield TestFailure(
                    test_name=node.name,
                    target_name=current_target,
                    failure_text=text,
                    source_location=location,
                )

        yield from _detailed_test_failures(node.children, path_prefix, current_target)


def _action(
    build: models.BuildResults | None, summary: models.TestSummary | None
) -> ActionRecord:
    device = build.destination if build else None
    if device is None and summary is not None:
        device = next(
            (
                entry.device
                for entry in summary.devices_and_configurations
                if entry.device
            ),
            None,
        )

    starts = _timestamps(
        build.start_time if build else None,
        summary.start_time if summary else None,
    )
    ends = _timestamps(
        build.end_time if build else None,
        summary.finish_time if summary else None,
    )

    return ActionRecord(
        title=(build.action_title if build else None)
        or (summary.title if summary else None),
        build_status=to_run_status(build.status if build else None),
        test_status=to_run_status(summary.result if summary else None),
        destination=device.device_name if device else None,
        sdk=device.sdk if device else None,
        started_at=min(starts, default=None),
        ended_at=max(ends, default=None),
    )


def _timestamps(*values: float | None) -> list[datetime]:
    return [
        timestamp
        for value in values
        if value is not None and (timestamp := _from_epoch(value)) is not None
    ]


def _from_epoch(value: float) -> datetime | None:
    """Convert epoch seconds to UTC; values outside the platform range are absent."""
    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, ValueError, OSError):
        return None
