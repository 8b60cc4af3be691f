"""Render the markdown summary of a Check Run.

The summary, build and test blocks are parsed by downstream tooling and must
keep their exact layout.
"""

from collections.abc import Sequence

from xcresult_check.metrics import extract_metrics
from xcresult_check.models.metrics import Metrics
from xcresult_check.models.result import ActionRecord, XcResult
from xcresult_check.models.settings import GenerationSettings


def summary(metrics: Metrics) -> str:
    """Prose block with error, warning and passed test counts."""
    return (
        "\n## Summary\n"
        f"🔨 Build finished with **{metrics.errors}** Errors"
        f" and **{metrics.warnings}** Warnings\n"
        f"🧪 {metrics.tests_passed}/{metrics.tests_total} tests passed\n"
    )


def build_summary_table(metrics: Metrics) -> str:
    """Table of build errors and warnings."""
    return (
        "\n\n## Build\n"
        "|Errors ⛔️| Warnings ⚠️|\n"
        "|:---------------|:----------------|\n"
        f"| {metrics.errors} | {metrics.warnings} |\n"
    )


def test_summary_table(metrics: Metrics) -> str:
    """Table of total, passed and failed tests."""
    return (
        "\n\n## Tests\n"
        "|Tests Total 🧪|Tests Passed ✅|Tests Failed ⛔️|\n"
        "|:---------------|:----------------|:------------|\n"
        f"| {metrics.tests_total} | {metrics.tests_passed} | {metrics.tests_failed} |\n"
    )


def sdk_info(actions: Sequence[ActionRecord]) -> str:
    """Table of the destination and SDK of each action; empty if none is known."""
    rows = [
        f"| {action.title or '-'} | {action.destination or '-'} | {action.sdk or '-'} |\n"
        for action in actions
        if action.destination or action.sdk
    ]
    if not rows:
        return ""
    return (
        "\n\n## Environment\n"
        "|Action|Destination|SDK|\n"
        "|:---------------|:----------------|:------------|\n"
        + "".join(rows)
    )


def timing_summary(actions: Sequence[ActionRecord]) -> str:
    """Table of the wall-clock duration of each action; empty if none is known."""
    rows = [
        f"| {action.title or '-'} | {duration:.1f}s |\n"
        for action in actions
        if (duration := action.duration) is not None
    ]
    if not rows:
        return ""
    return (
        "\n\n## Timing\n"
        "|Action|Duration ⏱|\n"
        "|:---------------|:----------------|\n"
        + "".join(rows)
    )


def generate_summary(result: XcResult, settings: GenerationSettings) -> str:
    """Concatenate the enabled blocks in their fixed order."""
    metrics = extract_metrics(result)
    blocks: list[str] = []

    if settings.summary:
        blocks.append(summary(metrics))
    if settings.build_summary_table:
        blocks.append(build_summary_table(metrics))
    if settings.test_summary_table:
        blocks.append(test_summary_table(metrics))
    if settings.show_sdk_info:
        blocks.append(sdk_info(result.actions))
    if settings.timing_summary:
        blocks.append(timing_summary(result.actions))

    return "".join(blocks)
