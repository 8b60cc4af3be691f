"""Legacy typed-value schema module."""

from xcresult_check.schemas.legacy.manifest import legacy_manifest
from xcresult_check.schemas.legacy.parser import INVOCATION, parse_invocation_record

__all__ = ["INVOCATION", "legacy_manifest", "parse_invocation_record"]
