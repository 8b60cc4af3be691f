"""Mapping of xcresulttool status strings onto run statuses."""

from collections.abc import Iterable, Mapping

from xcresult_check.models.result import RunStatus

STATUS_ALIASES: Mapping[str, RunStatus] = {
    "succeeded": "succeeded",
    "success": "succeeded",
    "passed": "succeeded",
    "failed": "failed",
    "failure": "failed",
    "errored": "failed",
}


def to_run_status(raw: str | None) -> RunStatus:
    """Map a status such as ``"Failed"`` or ``"succeeded"``; others are unknown."""
    if raw is None:
        return "unknown"
    return STATUS_ALIASES.get(raw.strip().lower(), "unknown")


def combine_statuses(statuses: Iterable[RunStatus]) -> RunStatus:
    """Reduce several statuses: any failure wins, then any success."""
    seen = set(statuses)
    if "failed" in seen:
        return "failed"
    if "succeeded" in seen:
        return "succeeded"
    return "unknown"
