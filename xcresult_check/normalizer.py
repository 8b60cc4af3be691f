"""Normalize xcresulttool output of any registered schema into one model."""

from collections.abc import Mapping

from xcresult_check.models.result import XcResult
from xcresult_check.schemas.loading import load_schema_manifest


def normalize(
    documents: Mapping[str, str], variant: str, *, path_prefix: str = ""
) -> XcResult:
    """Parse raw documents of the given schema variant.

    Args:
        documents: Raw xcresulttool output keyed by document kind
        variant: Registered schema key, "legacy" or "compact"
        path_prefix: Checkout directory stripped from source file paths

    Returns:
        The canonical result

    Raises:
        MalformedDocumentError: If the documents yield no result at all
        SchemaNotFoundError: If the variant is not registered

    """
    manifest = load_schema_manifest(variant)
    return manifest.parser(documents, path_prefix)
