"""Per-entry substitution results and the emitter protocol used to surface them."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from flakeinit.core.types import Outcome


@dataclass(frozen=True, kw_only=True)
class ItemResult:
    """
    What happened to one file-system entry in one pass.

    Attributes:
        path: Location of the entry when it was processed.
        outcome: Result of the operation.
        new_path: Destination of a rename, if one was attempted.
        occurrences: Number of token occurrences replaced in the content.
        error: Human-readable reason for a failure.
    """

    path: Path
    outcome: Outcome
    new_path: Path | None = None
    occurrences: int = 0
    error: str | None = None


@dataclass
class SubstitutionReport:
    """Ordered results of a substitution run. Failures are data, not exceptions."""

    token: str
    replacement: str
    results: list[ItemResult] = field(default_factory=list)

    def add(self, result: ItemResult) -> None:
        self.results.append(result)

    def by_outcome(self, outcome: Outcome) -> list[ItemResult]:
        return [r for r in self.results if r.outcome == outcome]

    @property
    def replaced(self) -> list[ItemResult]:
        return self.by_outcome(Outcome.CONTENT_REPLACED)

    @property
    def renamed(self) -> list[ItemResult]:
        return self.by_outcome(Outcome.RENAMED)

    @property
    def failures(self) -> list[ItemResult]:
        return [r for r in self.results if r.outcome.failed]

    @property
    def ok(self) -> bool:
        return not self.failures


class ReportEmitter(Protocol):
    """Sink for progress events. Lets the engine run without a terminal."""

    def item(self, result: ItemResult) -> None: ...

    def success(self, message: str) -> None: ...

    def failure(self, message: str) -> None: ...


class NullEmitter:
    """Emitter that discards everything."""

    def item(self, result: ItemResult) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def failure(self, message: str) -> None:
        pass
