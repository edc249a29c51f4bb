"""Console rendering of substitution results and pipeline messages."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from flakeinit.core.report import ItemResult, SubstitutionReport
from flakeinit.core.types import Outcome


def _display(path: Path, root: Path | None) -> str:
    if root is not None:
        try:
            return escape(str(path.relative_to(root)))
        except ValueError:
            pass
    return escape(str(path))


class ConsoleEmitter:
    """Prints each non-skipped result as one ``│``-prefixed line."""

    def __init__(self, console: Console, root: Path | None = None) -> None:
        self.console = console
        self.root = root

    def item(self, result: ItemResult) -> None:
        path = _display(result.path, self.root)
        if result.outcome == Outcome.CONTENT_REPLACED:
            n = result.occurrences
            noun = "occurrence" if n == 1 else "occurrences"
            self.console.print(f"[dim]│[/]  [bold green]✔[/] Replaced {n} {noun} in {path}")
        elif result.outcome == Outcome.RENAMED:
            new = _display(result.new_path or result.path, self.root)
            self.console.print(f"[dim]│[/]  [bold green]✔[/] Renamed {path} → {new}")
        elif result.outcome == Outcome.READ_FAILED:
            self._failed(f"Failed to read {path}", result.error)
        elif result.outcome == Outcome.WRITE_FAILED:
            self._failed(f"Failed to write {path}", result.error)
        elif result.outcome == Outcome.RENAME_FAILED:
            self._failed(f"Failed to rename {path}", result.error)

    def _failed(self, message: str, reason: str | None) -> None:
        suffix = f" [dim]({escape(reason)})[/]" if reason else ""
        self.console.print(f"[dim]│[/]  [bold red]✘[/] {message}{suffix}")

    def success(self, message: str) -> None:
        self.console.print(f"[dim]│[/]  [bold green]✔[/] {escape(message)}")

    def failure(self, message: str) -> None:
        self.console.print(f"[dim]│[/]  [bold yellow]![/] {escape(message)}")


def print_summary(console: Console, report: SubstitutionReport) -> None:
    """One-line tally of the substitution run."""
    failed = len(report.failures)
    failed_str = f"[bold red]{failed} failed[/]" if failed else "0 failed"
    console.print(
        f"[dim]│[/]  {len(report.replaced)} files rewritten, "
        f"{len(report.renamed)} paths renamed, {failed_str}"
    )
