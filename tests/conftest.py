"""Shared fixtures for the flakeinit test suite."""

from __future__ import annotations

import json
from pathlib import Path
import subprocess

import pytest

from flakeinit.core.report import ItemResult


class RecordingEmitter:
    """Emitter that keeps everything it receives."""

    def __init__(self) -> None:
        self.items: list[ItemResult] = []
        self.successes: list[str] = []
        self.failures: list[str] = []

    def item(self, result: ItemResult) -> None:
        self.items.append(result)

    def success(self, message: str) -> None:
        self.successes.append(message)

    def failure(self, message: str) -> None:
        self.failures.append(message)


def completed(
    stdout: str = "", stderr: str = "", returncode: int = 0
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A small generated tree using the placeholder in contents and names."""
    root = tmp_path / "generated"
    (root / "src").mkdir(parents=True)
    (root / "src" / "project_name.txt").write_text("Hello, project_name!")
    (root / "flake.nix").write_text(
        '{\n  description = "project_name";\n  outputs = { self }: { project_name = 1; };\n}\n'
    )
    (root / "LICENSE").write_text("MIT License\n")
    (root / "project_name").mkdir()
    (root / "project_name" / "__init__.py").write_text('NAME = "project_name"\n')
    (root / "project_name" / "project_name_test.py").write_text("import project_name\n")
    return root


def registry_json(templates: dict[str, str | None]) -> str:
    """Render ``nix flake show --json`` output. ``None`` marks the default template."""
    body = {
        key: ({"description": desc} if desc is not None else {"description": "A flake"})
        for key, desc in templates.items()
    }
    return json.dumps({"templates": body})


@pytest.fixture
def registry_output() -> str:
    return registry_json(
        {
            "default": None,
            "rust": "Nix Flake Template for Rust",
            "python": "Nix Flake Template for Python",
            "rust-alt": "Nix Flake Template for Rust",
            "go": "Nix Flake Template for Go",
        }
    )
