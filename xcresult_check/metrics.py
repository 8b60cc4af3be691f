"""Derive summary counters from a normalized result."""

from xcresult_check.models.metrics import Metrics
from xcresult_check.models.result import XcResult


def extract_metrics(result: XcResult) -> Metrics:
    """Return test and build counters, with passed tests derived from the rest."""
    run = result.metrics
    return Metrics(
        tests_total=run.tests_total,
        tests_passed=run.tests_passed,
        tests_failed=run.tests_failed,
        warnings=run.warnings,
        errors=run.errors,
    )
