"""Tests for the compact result documents parser."""

import json
from datetime import UTC, datetime

import pytest

from xcresult_check.errors import MalformedDocumentError
from xcresult_check.models.result import (
    ActionRecord,
    BuildIssue,
    SourceLocation,
    TestFailure,
)
from xcresult_check.schemas.compact import parse_compact_documents
from xcresult_check.testing.compact.payloads import (
    build_results,
    compact_documents,
    destination,
    failed_case,
    failure,
    issue,
    node,
    results_details,
    results_summary,
)

PREFIX = "/Users/ci/checkout"


def test_reads_metrics_and_statuses() -> None:
    """Takes test counts from the summary and build counts from build results."""
    documents = compact_documents(
        build=build_results(status="failed", warning_count=4, error_count=2),
        summary=results_summary(result="Failed", total_test_count=9, failed_tests=3),
    )

    result = parse_compact_documents(documents, PREFIX)

    assert result.metrics.tests_total == 9
    assert result.metrics.tests_failed == 3
    assert result.metrics.tests_passed == 6
    assert result.metrics.warnings == 4
    assert result.metrics.errors == 2
    assert result.metrics.build_status == "failed"
    assert result.metrics.test_status == "failed"


def test_build_results_only() -> None:
    """Produces a result when the bundle has no test results."""
    documents = compact_documents(build=build_results(warning_count=1))

    result = parse_compact_documents(documents, PREFIX)

    assert result.metrics.tests_total == 0
    assert result.metrics.warnings == 1
    assert result.metrics.build_status == "succeeded"
    assert result.metrics.test_status == "unknown"


def test_null_counts_default_to_zero() -> None:
    """Treats explicit nulls like missing fields."""
    documents = {
        "build-results": json.dumps(
            {"warningCount": None, "errorCount": None, "warnings": None}
        ),
        "test-summary": json.dumps({"totalTestCount": None, "testFailures": None}),
    }

    result = parse_compact_documents(documents, PREFIX)

    assert result.metrics.tests_total == 0
    assert result.metrics.warnings == 0
    assert result.metrics.errors == 0
    assert result.metrics.build_status == "unknown"
    assert result.issues.warnings == []


def test_unusable_counts_become_zero() -> None:
    """A bad counter degrades on its own and keeps the document's status."""
    build = build_results(status="failed", warning_count=3)
    build["errorCount"] = "n/a"
    summary = results_summary(result="Failed", failed_tests=1)
    summary["totalTestCount"] = -1
    documents = {
        "build-results": json.dumps(build),
        "test-summary": json.dumps(summary),
    }

    result = parse_compact_documents(documents, PREFIX)

    assert result.metrics.errors == 0
    assert result.metrics.warnings == 3
    assert result.metrics.build_status == "failed"
    assert result.metrics.tests_failed == 1
    assert result.metrics.tests_total == 1


def test_negative_count_does_not_abort() -> None:
    """A negative counter alone still yields a result."""
    result = parse_compact_documents({"build-results": '{"warningCount": -1}'}, PREFIX)

    assert result.metrics.warnings == 0


def test_out_of_range_timestamps_are_absent() -> None:
    """Epoch values the platform cannot represent are dropped."""
    documents = compact_documents(
        build=build_results(start_time=1e20, end_time=4070952030.0),
        summary=results_summary(start_time=float("-1e300"), finish_time=1e20),
    )

    result = parse_compact_documents(documents, PREFIX)

    (action,) = result.actions
    assert action.started_at is None
    assert action.ended_at == datetime(2099, 1, 1, 12, 0, 30, tzinfo=UTC)


def test_reads_build_issues() -> None:
    """Resolves source URLs of warnings and errors."""
    documents = compact_documents(
        build=build_results(
            warnings=[
                issue(
                    message="Initialization of 'x' was never used",
                    source_url=f"file://{PREFIX}/App/View.swift"
                    "#EndingLineNumber=9&StartingLineNumber=9",
                ),
                issue(message="Deprecated API", issue_type=None),
            ],
            errors=[
                issue(
                    message="Missing return",
                    issue_type="Swift Compiler Error",
                    source_url="::garbage::",
                )
            ],
        )
    )

    result = parse_compact_documents(documents, PREFIX)

    assert result.issues.warnings == [
        BuildIssue(
            issue_type="Swift Compiler Warning",
            message="Initialization of 'x' was never used",
            source_location=SourceLocation(
                file="App/View.swift", start_line=10, end_line=10
            ),
        ),
        BuildIssue(message="Deprecated API"),
    ]
    assert result.issues.errors == [
        BuildIssue(issue_type="Swift Compiler Error", message="Missing return")
    ]


def test_walks_test_tree_for_failures() -> None:
    """Collects failure messages of failed test cases with their bundle target."""
    details = results_details(
        [
            node(
                "Unit test bundle",
                "LoginTests",
                result="Failed",
                children=[
                    node(
                        "Test Suite",
                        "LoginTests",
                        result="Failed",
                        children=[
                            node("Test Case", "testPasses()", result="Passed"),
                            failed_case(
                                "testRejectsEmptyPassword()",
                                "LoginTests.swift:42: XCTAssertFalse failed",
                                "LoginTests.swift:43: XCTAssertEqual failed",
                            ),
                        ],
                    )
                ],
            ),
            failed_case(
                "testLaunch()",
                "App crashed in LaunchTests",
                target_bundle="AppUITests",
            ),
        ]
    )
    documents = compact_documents(details=details)

    result = parse_compact_documents(documents, PREFIX)

    assert result.issues.test_failures == [
        TestFailure(
            test_name="testRejectsEmptyPassword()",
            target_name="LoginTests",
            failure_text="XCTAssertFalse failed",
            source_location=SourceLocation(
                file="LoginTests.swift", start_line=42, end_line=42
            ),
        ),
        TestFailure(
            test_name="testRejectsEmptyPassword()",
            target_name="LoginTests",
            failure_text="XCTAssertEqual failed",
            source_location=SourceLocation(
                file="LoginTests.swift", start_line=43, end_line=43
            ),
        ),
        TestFailure(
            test_name="testLaunch()",
            target_name="AppUITests",
            failure_text="App crashed in LaunchTests",
        ),
    ]


def test_ignores_failure_messages_of_passed_cases() -> None:
    """Only failed test cases contribute failures."""
    details = results_details(
        [
            node(
                "Test Case",
                "testFlaky()",
                result="Passed",
                children=[node("Failure Message", "Flaky.swift:3: failed once")],
            )
        ]
    )

    result = parse_compact_documents(compact_documents(details=details), PREFIX)

    assert result.issues.test_failures == []


def test_falls_back_to_summary_failures() -> None:
    """Uses the summary's failures when the test tree is unavailable."""
    documents = compact_documents(
        summary=results_summary(
            result="Failed",
            total_test_count=2,
            failed_tests=1,
            test_failures=[
                failure(
                    test_name="testSum()",
                    target_name="MathTests",
                    failure_text="XCTAssertEqual failed: (3) is not equal to (4)",
                )
            ],
        )
    )

    result = parse_compact_documents(documents, PREFIX)

    assert result.issues.test_failures == [
        TestFailure(
            test_name="testSum()",
            target_name="MathTests",
            failure_text="XCTAssertEqual failed: (3) is not equal to (4)",
        )
    ]


def test_detailed_failures_take_precedence_over_summary() -> None:
    """Prefers the located failures of the test tree."""
    documents = compact_documents(
        summary=results_summary(test_failures=[failure()]),
        details=results_details([]),
    )

    result = parse_compact_documents(documents, PREFIX)

    assert result.issues.test_failures == []


def test_builds_single_action() -> None:
    """Combines build and test documents into one action."""
    documents = compact_documents(
        build=build_results(
            action_title='Test "App"',
            device=destination(
                device_name="iPhone 15", platform="iOS Simulator", os_version="17.2"
            ),
            start_time=4070952000.0,
            end_time=4070952030.0,
        ),
        summary=results_summary(
            result="Passed", start_time=4070952010.0, finish_time=4070952090.0
        ),
    )

    result = parse_compact_documents(documents, PREFIX)

    assert result.actions == [
        ActionRecord(
            title='Test "App"',
            build_status="succeeded",
            test_status="succeeded",
            destination="iPhone 15",
            sdk="iOS Simulator 17.2",
            started_at=datetime(2099, 1, 1, 12, 0, tzinfo=UTC),
            ended_at=datetime(2099, 1, 1, 12, 1, 30, tzinfo=UTC),
        )
    ]


def test_action_uses_test_device_without_build_results() -> None:
    """Takes the destination from the test summary's devices."""
    documents = compact_documents(
        summary=results_summary(device=destination(device_name="iPad Air"))
    )

    result = parse_compact_documents(documents, PREFIX)

    assert result.actions[0].destination == "iPad Air"
    assert result.actions[0].title == "Test - App"


def test_no_action_from_test_tree_alone() -> None:
    """The test tree carries no action information."""
    result = parse_compact_documents(
        compact_documents(details=results_details([])), PREFIX
    )

    assert result.actions == []


def test_undecodable_document_degrades_to_empty() -> None:
    """Uses the remaining documents when one cannot be decoded."""
    documents = compact_documents(build=build_results(error_count=1))
    documents["test-summary"] = "xcresulttool: error: no test results"

    result = parse_compact_documents(documents, PREFIX)

    assert result.metrics.errors == 1
    assert result.metrics.tests_total == 0


@pytest.mark.parametrize(
    "documents",
    [
        {},
        {"build-results": "", "test-summary": ""},
        {"build-results": "not json", "test-summary": "[]"},
    ],
)
def test_raises_when_nothing_decodes(documents: dict[str, str]) -> None:
    """Raises MalformedDocumentError when no document is usable."""
    with pytest.raises(MalformedDocumentError):
        parse_compact_documents(documents, PREFIX)
