"""Lookup of xcresulttool schema plugins registered as entry points."""

from functools import cache
from importlib.metadata import entry_points

from xcresult_check.schemas.manifest import SchemaManifest

ENTRY_POINT_GROUP = "xcresult_check.schemas"


class SchemaNotFoundError(Exception):
    """Raised when no usable schema is registered under a key."""


def available_schemas() -> list[str]:
    """Keys of all registered schemas, sorted."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


@cache
def load_schema_manifest(key: str) -> SchemaManifest:
    """Load the manifest registered under ``key`` (e.g. "legacy", "compact").

    Manifests are module-level constants, so each is loaded once per process.

    Raises:
        SchemaNotFoundError: If ``key`` is not registered or does not point
            at a SchemaManifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise SchemaNotFoundError(
            f"Schema '{key}' not found. Available schemas: {available_schemas()}"
        )

    target = next(iter(matches))
    manifest = target.load()
    if not isinstance(manifest, SchemaManifest):
        raise SchemaNotFoundError(
            f"Schema '{key}' points at {target.value}, which is not a SchemaManifest"
        )
    return manifest
