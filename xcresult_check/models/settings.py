"""Toggles controlling which sections of the check output are generated."""

from xcresult_check.models.base import Model


class GenerationSettings(Model):
    """Independent switches for each summary block and annotation kind."""

    build_summary_table: bool = True
    test_summary_table: bool = True
    test_failure_annotations: bool = True
    summary: bool = True
    warning_annotations: bool = True
    error_annotations: bool = True
    show_sdk_info: bool = True
    timing_summary: bool = True
