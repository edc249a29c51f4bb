"""Configuration dataclasses for flakeinit."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path

from flakeinit.core.types import Mode

DEFAULT_REGISTRY = "github:nulladmin1/nix-flake-templates"
DEFAULT_EXPERIMENTAL_FEATURES = "nix-command flakes"

REGISTRY_ENV = "FLAKEINIT_REGISTRY"
NIX_ENV = "FLAKEINIT_NIX"
GIT_ENV = "FLAKEINIT_GIT"


@dataclass(kw_only=True)
class Settings:
    """
    Locations of the external tools and of the template registry.

    Attributes:
        registry: Flake reference of the template registry.
        nix: Executable used to list and instantiate templates.
        git: Executable used to initialize the repository.
        experimental_features: Value passed to ``--extra-experimental-features``.
    """

    registry: str = DEFAULT_REGISTRY
    nix: str = "nix"
    git: str = "git"
    experimental_features: str = DEFAULT_EXPERIMENTAL_FEATURES

    def __post_init__(self) -> None:
        for name in ("registry", "nix", "git", "experimental_features"):
            if not getattr(self, name).strip():
                raise ValueError(f"{name} must not be empty.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``FLAKEINIT_*`` environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            registry=env.get(REGISTRY_ENV) or DEFAULT_REGISTRY,
            nix=env.get(NIX_ENV) or "nix",
            git=env.get(GIT_ENV) or "git",
        )

    def template_ref(self, template_id: str) -> str:
        return f"{self.registry}#{template_id}"


@dataclass(frozen=True, kw_only=True)
class ProjectConfig:
    """
    Answers collected from the user. Immutable once built.

    Attributes:
        template_id: Registry identifier of the chosen template.
        mode: Create a new directory or initialize the current one.
        project_name: Replacement for the placeholder token; also the new directory name.
        init_git: Run ``git init`` on the result.
        clear_readme: Overwrite ``README.md`` with a short stub.
    """

    template_id: str
    mode: Mode
    project_name: str
    init_git: bool = False
    clear_readme: bool = False

    def target_dir(self, cwd: Path) -> Path:
        """Directory the generated tree lives in."""
        if self.mode == Mode.CREATE:
            return cwd / self.project_name
        return cwd
