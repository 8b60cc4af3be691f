"""Schema manifest definition for the plugin system."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from xcresult_check.models.result import XcResult

type DocumentParser = Callable[[Mapping[str, str], str], XcResult]


@dataclass(frozen=True, kw_only=True)
class SchemaManifest:
    """Manifest describing one xcresulttool output schema.

    ``commands`` maps each document kind the schema needs to the xcresulttool
    argument vectors that produce it, tried in order until one succeeds. The
    bundle path is appended by the loader. ``parser`` turns the loaded
    documents and a path prefix into the canonical result.
    """

    commands: Mapping[str, Sequence[Sequence[str]]]
    parser: DocumentParser
