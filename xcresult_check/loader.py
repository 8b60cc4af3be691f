"""Run xcresulttool against a result bundle and collect its JSON output."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from xcresult_check.errors import XcResultToolError
from xcresult_check.schemas.manifest import SchemaManifest

log = logging.getLogger(__name__)

XCRESULTTOOL = ("xcrun", "xcresulttool")


async def run_xcresulttool(args: Sequence[str]) -> str:
    """Run ``xcrun xcresulttool`` with ``args`` and return its stripped stdout.

    Raises:
        XcResultToolError: If the tool exits with a non-zero status

    """
    process = await asyncio.create_subprocess_exec(
        *XCRESULTTOOL,
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()

    if process.returncode != 0:
        raise XcResultToolError(
            f"xcresulttool {' '.join(args)} failed: {stderr.decode().strip()}"
        )

    return stdout.decode().strip()


async def load_documents(
    bundle_path: Path, manifest: SchemaManifest
) -> Mapping[str, str]:
    """Fetch every document kind of a schema from the bundle in parallel.

    Args:
        bundle_path: Path to the .xcresult bundle
        manifest: Schema whose document kinds should be fetched

    Returns:
        Raw output by document kind. Kinds whose invocations all failed or
        produced no output are left out.

    """
    kinds = list(manifest.commands)
    outputs = await asyncio.gather(
        *(
            _load_document(bundle_path, kind, manifest.commands[kind])
            for kind in kinds
        ),
        return_exceptions=True,
    )

    documents: dict[str, str] = {}
    for kind, output in zip(kinds, outputs, strict=True):
        if isinstance(output, BaseException):
            if not isinstance(output, Exception):
                raise output
            log.warning("Failed to load %s from %s: %s", kind, bundle_path, output)
        elif output:
            documents[kind] = output
        else:
            log.warning("xcresulttool returned no %s for %s", kind, bundle_path)

    return documents


async def _load_document(
    bundle_path: Path, kind: str, candidates: Sequence[Sequence[str]]
) -> str:
    """Try each argument vector in turn, returning the first successful output."""
    error: Exception | None = None
    for args in candidates:
        try:
            return await run_xcresulttool([*args, "--path", str(bundle_path)])
        except (XcResultToolError, OSError) as e:
            log.debug("xcresulttool %s failed for %s: %s", " ".join(args), kind, e)
            error = e

    raise XcResultToolError(f"No xcresulttool invocation produced {kind}") from error
