"""Optional steps run after substitution: ``git init`` and README reset."""

from __future__ import annotations

import logging
from pathlib import Path

from flakeinit.core.config import ProjectConfig, Settings
from flakeinit.core.errors import FinalizeError
from flakeinit.core.report import NullEmitter, ReportEmitter
from flakeinit.lib.process import run_command, stderr_tail

README_NAME = "README.md"

log = logging.getLogger(__name__)


def readme_content(project_name: str) -> str:
    return f"# {project_name}\n\nLorem ipsum dolor sit amet"


def init_git(root: Path, settings: Settings) -> None:
    try:
        result = run_command([settings.git, "init", str(root)])
    except OSError as e:
        raise FinalizeError(f"Failed to run {settings.git}: {e}") from e

    if result.returncode != 0:
        detail = stderr_tail(result)
        message = f"git init exited with status {result.returncode}"
        raise FinalizeError(f"{message}: {detail}" if detail else message)


def clear_readme(root: Path, project_name: str) -> Path:
    """Create or truncate ``README.md`` under *root* with a two-line stub."""
    path = root / README_NAME
    try:
        path.write_text(readme_content(project_name), encoding="utf-8")
    except OSError as e:
        raise FinalizeError(f"Failed to write {path}: {e}") from e
    return path


def finalize(
    root: Path,
    config: ProjectConfig,
    settings: Settings,
    emitter: ReportEmitter | None = None,
) -> list[FinalizeError]:
    """Run the enabled post-init steps. Failures are reported and returned, never raised."""
    emitter = emitter or NullEmitter()
    errors: list[FinalizeError] = []

    if config.init_git:
        try:
            init_git(root, settings)
        except FinalizeError as e:
            log.debug("git init failed: %s", e)
            emitter.failure(str(e))
            errors.append(e)
        else:
            emitter.success("Initialized Git repository")

    if config.clear_readme:
        try:
            clear_readme(root, config.project_name)
        except FinalizeError as e:
            log.debug("README reset failed: %s", e)
            emitter.failure(str(e))
            errors.append(e)
        else:
            emitter.success(f"Cleared {README_NAME}")

    return errors
