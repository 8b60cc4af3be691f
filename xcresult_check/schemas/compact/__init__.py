"""Compact build and test results schema module."""

from xcresult_check.schemas.compact.manifest import compact_manifest
from xcresult_check.schemas.compact.parser import (
    BUILD_RESULTS,
    TEST_DETAILS,
    TEST_SUMMARY,
    parse_compact_documents,
)

__all__ = [
    "BUILD_RESULTS",
    "TEST_DETAILS",
    "TEST_SUMMARY",
    "compact_manifest",
    "parse_compact_documents",
]
