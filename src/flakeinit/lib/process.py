"""Blocking execution of external commands."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from pathlib import Path
import shlex
import subprocess

log = logging.getLogger(__name__)


def format_command(args: Sequence[str]) -> str:
    return shlex.join(args)


def run_command(args: Sequence[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Run *args* to completion and capture its output.

    A non-zero exit status is returned, not raised; callers decide what it means.
    ``OSError`` (executable missing, not executable) propagates.
    """
    log.debug("Running %s (cwd=%s)", format_command(args), cwd or ".")
    result = subprocess.run(
        list(args),
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    log.debug("%s exited with %d", args[0], result.returncode)
    return result


def stderr_tail(result: subprocess.CompletedProcess[str], lines: int = 5) -> str:
    """Last few lines of stderr, for error messages."""
    tail = (result.stderr or "").strip().splitlines()[-lines:]
    return "\n".join(tail)
