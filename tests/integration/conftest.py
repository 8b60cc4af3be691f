"""Fixtures for integration tests."""

import os
import stat
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import pytest

FAKE_XCRUN = """#!/bin/sh
dir="$(dirname "$0")"
printf '%s\\n' "$*" >> "$dir/calls.log"
for args_file in "$dir"/cases/*.args; do
  [ -e "$args_file" ] || continue
  if [ "$(cat "$args_file")" = "$*" ]; then
    case_file="${args_file%.args}"
    cat "$case_file.out"
    echo "$(cat "$case_file.err")" >&2
    exit "$(cat "$case_file.code")"
  fi
done
echo "xcresulttool: error: unexpected arguments: $*" >&2
exit 64
"""


class RegisterFn(Protocol):
    """Protocol for registering a canned xcrun response."""

    def __call__(
        self,
        args: Sequence[str],
        stdout: str = "",
        *,
        stderr: str = "",
        exit_code: int = 0,
    ) -> None:
        """Answer ``xcrun <args>`` with the given output and exit code."""


class CallsFn(Protocol):
    """Protocol for reading recorded xcrun invocations."""

    def __call__(self) -> list[str]:
        """Return the argument strings xcrun was invoked with, in order."""


@pytest.fixture
def bundle_path(tmp_path: Path) -> Path:
    """Path of a result bundle; only ever passed through to xcrun."""
    path = tmp_path / "Test.xcresult"
    path.mkdir()
    return path


@pytest.fixture
def xcrun_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Install a scripted ``xcrun`` first on PATH."""
    bin_dir = tmp_path / "bin"
    (bin_dir / "cases").mkdir(parents=True)
    script = bin_dir / "xcrun"
    script.write_text(FAKE_XCRUN)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("PATH", f"{bin_dir}:{os.environ.get('PATH', '/usr/bin:/bin')}")
    return bin_dir


@pytest.fixture
def register_xcrun(xcrun_dir: Path) -> RegisterFn:
    """Return a function to script responses of the fake xcrun."""
    cases = xcrun_dir / "cases"

    def _register(
        args: Sequence[str],
        stdout: str = "",
        *,
        stderr: str = "",
        exit_code: int = 0,
    ) -> None:
        case = cases / str(len(list(cases.glob("*.args"))))
        case.with_suffix(".args").write_text(" ".join(args))
        case.with_suffix(".out").write_text(stdout)
        case.with_suffix(".err").write_text(stderr)
        case.with_suffix(".code").write_text(str(exit_code))

    return _register


@pytest.fixture
def xcrun_calls(xcrun_dir: Path) -> CallsFn:
    """Return a function listing the recorded xcrun invocations."""
    log_file = xcrun_dir / "calls.log"

    def _calls() -> list[str]:
        if not log_file.exists():
            return []
        return log_file.read_text().splitlines()

    return _calls
