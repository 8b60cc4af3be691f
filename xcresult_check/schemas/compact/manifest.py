"""Compact schema manifest."""

from xcresult_check.schemas.compact.parser import (
    BUILD_RESULTS,
    TEST_DETAILS,
    TEST_SUMMARY,
    parse_compact_documents,
)
from xcresult_check.schemas.manifest import SchemaManifest

compact_manifest = SchemaManifest(
    commands={
        BUILD_RESULTS: (("get", "build-results", "--compact"),),
        TEST_SUMMARY: (("get", "test-results", "summary", "--compact"),),
        TEST_DETAILS: (("get", "test-results", "tests", "--compact"),),
    },
    parser=parse_compact_documents,
)
