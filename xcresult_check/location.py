"""Resolve xcresulttool document locations into repository file positions."""

import re
from urllib.parse import parse_qsl, unquote, urlsplit

from xcresult_check.models.result import SourceLocation

STARTING_LINE_KEY = "StartingLineNumber"
ENDING_LINE_KEY = "EndingLineNumber"

FAILURE_MESSAGE_PATTERN = re.compile(
    r"^(?P<file>[^\n:]+\.(?:swift|mm?|c|cc|cpp|h|hpp)):(?P<line>\d+):\s*(?P<text>.+)$",
    re.DOTALL,
)


def strip_path_prefix(path: str, path_prefix: str) -> str:
    """Remove a leading ``path_prefix`` directory from ``path``.

    The path is returned unchanged when it does not start with the prefix.
    """
    if not path_prefix:
        return path
    return path.removeprefix(path_prefix.rstrip("/") + "/")


def resolve_location(raw: str, path_prefix: str = "") -> SourceLocation | None:
    """Decode a document location URL into a 1-based source location.

    Args:
        raw: URL such as
            ``file:///src/App/Foo.swift#StartingLineNumber=21&EndingLineNumber=23``
            where line numbers are 0-based
        path_prefix: Checkout directory to strip from the file path

    Returns:
        The location, or None when ``raw`` is not a usable URL

    """
    try:
        parts = urlsplit(raw)
    except ValueError:
        return None

    if not parts.scheme or not parts.path:
        return None

    lines: dict[str, int] = {}
    for key, value in parse_qsl(parts.fragment):
        if key not in (STARTING_LINE_KEY, ENDING_LINE_KEY):
            continue
        try:
            line = int(value)
        except ValueError:
            continue
        if line >= 0:
            lines[key] = line + 1

    start_line = lines.get(STARTING_LINE_KEY)
    return SourceLocation(
        file=strip_path_prefix(unquote(parts.path), path_prefix),
        start_line=start_line,
        end_line=lines.get(ENDING_LINE_KEY, start_line),
    )


def parse_failure_message(
    message: str, path_prefix: str = ""
) -> tuple[SourceLocation | None, str]:
    """Split ``"FooTests.swift:22: XCTAssertTrue failed"`` into location and text.

    Lines in failure messages are already 1-based. Messages without a
    ``file:line:`` head yield no location and are returned whole.
    """
    match = FAILURE_MESSAGE_PATTERN.match(message)
    if match is None:
        return None, message

    line = int(match["line"])
    if line < 1:
        return None, message

    location = SourceLocation(
        file=strip_path_prefix(match["file"], path_prefix),
        start_line=line,
        end_line=line,
    )
    return location, match["text"]
