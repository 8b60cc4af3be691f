"""Turn result issues into GitHub Check Run annotations."""

from collections.abc import Iterable, Iterator, Sequence
from itertools import chain, islice

from xcresult_check.models.annotation import AnnotationLevel, GitHubAnnotation
from xcresult_check.models.result import (
    BuildIssue,
    SourceLocation,
    TestFailure,
    XcResult,
)
from xcresult_check.models.settings import GenerationSettings

# GitHub rejects more annotations per check run request.
MAX_ANNOTATIONS = 50

UNKNOWN_PATH = "unknown"
PLACEHOLDER_LINE = 1


def generate_annotations(
    result: XcResult, settings: GenerationSettings
) -> Sequence[GitHubAnnotation]:
    """Build annotations for test failures, then warnings, then errors.

    Each kind keeps its report order and can be switched off in ``settings``.
    Only the first ``MAX_ANNOTATIONS`` candidates are returned.
    """
    issues = result.issues
    candidates: Iterable[GitHubAnnotation] = chain(
        _test_failure_annotations(issues.test_failures)
        if settings.test_failure_annotations
        else (),
        _build_issue_annotations(issues.warnings, "warning", "Warning")
        if settings.warning_annotations
        else (),
        _build_issue_annotations(issues.errors, "failure", "Error")
        if settings.error_annotations
        else (),
    )
    return list(islice(candidates, MAX_ANNOTATIONS))


def _test_failure_annotations(
    failures: Iterable[TestFailure],
) -> Iterator[GitHubAnnotation]:
    for failure in failures:
        yield _annotation(
            failure.source_location,
            level="failure",
            title=f"{failure.test_name} failed",
            message=failure.failure_text or "Test failed",
        )


def _build_issue_annotations(
    issues: Iterable[BuildIssue], level: AnnotationLevel, label: str
) -> Iterator[GitHubAnnotation]:
    for issue in issues:
        yield _annotation(
            issue.source_location,
            level=level,
            title=issue.issue_type or label,
            message=issue.message or f"{label} occurred",
        )


def _annotation(
    location: SourceLocation | None,
    *,
    level: AnnotationLevel,
    title: str,
    message: str,
) -> GitHubAnnotation:
    """Anchor an annotation, substituting placeholders for missing positions.

    GitHub requires a path and a start line on every annotation: issues
    without a location point at ``unknown`` line 1.
    """
    if location is None:
        return GitHubAnnotation(
            path=UNKNOWN_PATH,
            start_line=PLACEHOLDER_LINE,
            end_line=PLACEHOLDER_LINE,
            annotation_level=level,
            title=title,
            message=message,
        )

    start_line = location.start_line or PLACEHOLDER_LINE
    end_line = max(location.end_line or start_line, start_line)
    return GitHubAnnotation(
        path=location.file,
        start_line=start_line,
        end_line=end_line,
        annotation_level=level,
        title=title,
        message=message,
    )
