"""Assemble the artifacts of a Check Run from a normalized result."""

from collections.abc import Sequence
from dataclasses import dataclass

from xcresult_check.annotations import generate_annotations
from xcresult_check.conclusion import Conclusion, resolve_conclusion
from xcresult_check.metrics import extract_metrics
from xcresult_check.models.annotation import GitHubAnnotation
from xcresult_check.models.metrics import Metrics
from xcresult_check.models.result import XcResult
from xcresult_check.models.settings import GenerationSettings
from xcresult_check.summary import generate_summary


@dataclass(frozen=True, kw_only=True)
class CheckReport:
    """Summary, annotations and conclusion ready to publish."""

    summary: str
    annotations: Sequence[GitHubAnnotation]
    conclusion: Conclusion
    metrics: Metrics


def build_report(result: XcResult, settings: GenerationSettings) -> CheckReport:
    """Derive every output artifact of one result."""
    return CheckReport(
        summary=generate_summary(result, settings),
        annotations=generate_annotations(result, settings),
        conclusion=resolve_conclusion(result),
        metrics=extract_metrics(result),
    )
