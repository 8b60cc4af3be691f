"""CLI entry point for publishing xcresult bundles as GitHub checks."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Literal

from xcresult_check.errors import MalformedDocumentError
from xcresult_check.github import (
    ChecksApiError,
    ChecksClient,
    ChecksConfig,
    CheckRunOutput,
    GitHubContext,
    GitHubContextError,
)
from xcresult_check.loader import load_documents
from xcresult_check.models.result import XcResult
from xcresult_check.models.settings import GenerationSettings
from xcresult_check.normalizer import normalize
from xcresult_check.report import CheckReport, build_report
from xcresult_check.schemas.loading import load_schema_manifest

type Command = Literal[
    "analyze", "summary", "metrics", "conclusion", "annotations", "publish"
]
type SchemaChoice = Literal["auto", "compact", "legacy"]

COMMANDS: Sequence[Command] = (
    "analyze",
    "summary",
    "metrics",
    "conclusion",
    "annotations",
    "publish",
)

LEVEL_SYMBOLS = {
    "failure": "❌",
    "warning": "⚠️",
    "notice": "ℹ️",
}


def parse_bool_input(value: str) -> bool:
    """Parse a GitHub Action boolean input; only 'true' is true."""
    return value.strip().lower() == "true"


def settings_from_args(args: argparse.Namespace) -> GenerationSettings:
    """Build settings, overriding defaults only for options that were given."""
    overrides = {
        name: value
        for name in GenerationSettings.model_fields
        if (value := getattr(args, name, None)) is not None
    }
    return GenerationSettings(**overrides)


async def load_result(
    results_path: Path, schema: SchemaChoice, path_prefix: str
) -> XcResult:
    """Load and normalize a bundle.

    With ``schema="auto"`` the compact documents are tried first and the
    legacy invocation record is used when none of them could be loaded.
    """
    log = logging.getLogger("xcresult_check")

    variant = "compact" if schema == "auto" else schema
    log.info("Loading %s results from %s", variant, results_path)
    documents = await load_documents(results_path, load_schema_manifest(variant))

    if schema == "auto" and not documents:
        log.info("No compact results available, falling back to legacy schema")
        variant = "legacy"
        documents = await load_documents(results_path, load_schema_manifest(variant))

    return normalize(documents, variant, path_prefix=path_prefix)


def log_report_summary(log: logging.Logger, report: CheckReport) -> None:
    """Log metrics and annotations of a report."""
    metrics = report.metrics
    log.info("=" * 80)
    log.info("Check Summary:")
    log.info("=" * 80)
    log.info("Tests: %d/%d passed", metrics.tests_passed, metrics.tests_total)
    log.info("Errors: %d", metrics.errors)
    log.info("Warnings: %d", metrics.warnings)
    log.info("Conclusion: %s", report.conclusion)

    for annotation in report.annotations:
        symbol = LEVEL_SYMBOLS.get(annotation.annotation_level, "?")
        log.info("%s %s", symbol, annotation.title)
        log.info(
            "  %s:%d - %s", annotation.path, annotation.start_line, annotation.message
        )


def format_annotations(report: CheckReport) -> list[dict[str, Any]]:
    """Format annotations for JSON output."""
    return [
        annotation.model_dump(mode="json", exclude_none=True)
        for annotation in report.annotations
    ]


async def publish(
    report: CheckReport, title: str, environ: Mapping[str, str]
) -> str:
    """Create a check run for ``report`` and return its URL."""
    context = GitHubContext.from_environ(environ)
    config = ChecksConfig(
        token=context.token,
        owner=context.owner,
        repo=context.repo,
        api_base_url=context.api_url,
    )
    output = CheckRunOutput(
        title=title, summary=report.summary, annotations=report.annotations
    )

    async with ChecksClient.from_config(config) as client:
        check_run = await client.create_check_run(
            name=title,
            head_sha=context.sha,
            conclusion=report.conclusion,
            output=output,
        )

    return check_run.html_url


async def run(
    results_path: Path,
    command: Command,
    settings: GenerationSettings,
    schema: SchemaChoice = "auto",
    path_prefix: str = "",
    title: str = "Xcode Results",
    environ: Mapping[str, str] | None = None,
) -> int:
    """Analyze a result bundle, print or publish the outcome and return exit code."""
    log = logging.getLogger("xcresult_check")

    try:
        result = await load_result(results_path, schema, path_prefix)
    except MalformedDocumentError as e:
        log.error("Cannot read %s: %s", results_path, e)
        return 1

    report = build_report(result, settings)

    match command:
        case "analyze":
            log_report_summary(log, report)
            print(report.summary)
        case "summary":
            print(report.summary)
        case "metrics":
            print(report.metrics.model_dump_json(by_alias=True, indent=2))
        case "conclusion":
            print(report.conclusion)
        case "annotations":
            print(json.dumps(format_annotations(report), indent=2))
        case "publish":
            log_report_summary(log, report)
            try:
                url = await publish(
                    report, title, os.environ if environ is None else environ
                )
            except (GitHubContextError, ChecksApiError) as e:
                log.error("Failed to publish check run: %s", e)
                return 1
            log.info("Check run created: %s", url)

    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Summarize an Xcode result bundle as a GitHub check"
    )
    parser.add_argument(
        "results",
        type=Path,
        help="Path to the .xcresult bundle",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="analyze",
        choices=COMMANDS,
        help="What to produce (default: analyze)",
    )
    parser.add_argument(
        "--schema",
        default="auto",
        choices=("auto", "compact", "legacy"),
        help="xcresulttool output schema to read (default: auto)",
    )
    parser.add_argument(
        "--path-prefix",
        default="",
        help="Checkout directory to strip from source file paths",
    )
    parser.add_argument(
        "--title",
        default="Xcode Results",
        help="Name and title of the check run",
    )
    for name in GenerationSettings.model_fields:
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            type=parse_bool_input,
            default=None,
            metavar="true|false",
            help=f"Enable {name.replace('_', ' ')} (default: true)",
        )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            results_path=args.results,
            command=args.command,
            settings=settings_from_args(args),
            schema=args.schema,
            path_prefix=args.path_prefix,
            title=args.title,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
