"""Legacy schema manifest."""

from xcresult_check.schemas.legacy.parser import INVOCATION, parse_invocation_record
from xcresult_check.schemas.manifest import SchemaManifest

legacy_manifest = SchemaManifest(
    commands={
        # Xcode 16 moved the typed-value output behind --legacy; older
        # releases reject the flag.
        INVOCATION: (
            ("get", "object", "--legacy", "--format", "json"),
            ("get", "--format", "json"),
        ),
    },
    parser=parse_invocation_record,
)
