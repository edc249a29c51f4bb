"""Project materialization through ``nix flake new`` / ``nix flake init``."""

from __future__ import annotations

import logging
from pathlib import Path

from flakeinit.core.config import ProjectConfig, Settings
from flakeinit.core.errors import MaterializeError
from flakeinit.core.types import Mode
from flakeinit.lib.process import run_command, stderr_tail

log = logging.getLogger(__name__)


def build_command(config: ProjectConfig, settings: Settings) -> list[str]:
    """Argument vector of the generator invocation for *config*."""
    args = [
        settings.nix,
        "--extra-experimental-features",
        settings.experimental_features,
        "flake",
        config.mode.value,
        "--template",
        settings.template_ref(config.template_id),
    ]
    if config.mode == Mode.CREATE:
        args.append(config.project_name)
    return args


def materialize(config: ProjectConfig, settings: Settings, cwd: Path | None = None) -> Path:
    """
    Generate the project tree and return the directory it lives in.

    Args:
        config: The collected answers.
        settings: Tool and registry locations.
        cwd: Working directory for the generator. Defaults to the process cwd.

    Raises:
        MaterializeError: The target already exists, the generator could not be
            started, or it exited with a non-zero status.
    """
    cwd = cwd or Path.cwd()
    target = config.target_dir(cwd)

    if config.mode == Mode.CREATE and target.exists():
        raise MaterializeError(f"Directory '{config.project_name}' already exists.")

    args = build_command(config, settings)
    try:
        result = run_command(args, cwd=cwd)
    except OSError as e:
        raise MaterializeError(f"Failed to run {settings.nix}: {e}") from e

    if result.returncode != 0:
        detail = stderr_tail(result)
        message = f"nix flake {config.mode.value} exited with status {result.returncode}"
        raise MaterializeError(f"{message}: {detail}" if detail else message)

    if not target.is_dir():
        raise MaterializeError(f"Generator did not produce directory '{target}'.")

    log.debug("Materialized %s into %s", config.template_id, target)
    return target
