"""Decide the Check Run conclusion of a result."""

from typing import Literal

from xcresult_check.models.result import XcResult

type Conclusion = Literal["success", "failure"]


def resolve_conclusion(result: XcResult) -> Conclusion:
    """Fail when the build failed, the tests failed, or any error was reported.

    Unknown statuses count as success.
    """
    run = result.metrics
    if run.build_status == "failed" or run.test_status == "failed" or run.errors > 0:
        return "failure"
    return "success"
