"""Shared value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Template:
    """
    A template listed by the registry.

    Attributes:
        identifier: Registry key used to select the template.
        description: Human-readable text shown in the selection list.
    """

    identifier: str
    description: str


class Mode(str, Enum):
    """Whether to create a new project directory or initialize the current one."""

    CREATE = "new"
    INIT = "init"

    @property
    def label(self) -> str:
        labels: dict[Mode, str] = {
            Mode.CREATE: "Create a new project",
            Mode.INIT: "Initialize in the current directory",
        }
        return labels[self]


class Outcome(str, Enum):
    """Result of processing one file-system entry during substitution."""

    CONTENT_REPLACED = "content-replaced"
    RENAMED = "renamed"
    READ_FAILED = "read-failed"
    WRITE_FAILED = "write-failed"
    RENAME_FAILED = "rename-failed"
    SKIPPED = "skipped"

    @property
    def failed(self) -> bool:
        return self in (Outcome.READ_FAILED, Outcome.WRITE_FAILED, Outcome.RENAME_FAILED)
