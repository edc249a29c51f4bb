"""Placeholder substitution over a freshly generated project tree.

Runs two passes over ``root``:

1. Content pass: every regular file containing the token is decoded as UTF-8,
   all occurrences are replaced and the file is written back.
2. Name pass: every file, directory or symlink whose base name contains the
   token is renamed, shallowest entries first.

The content pass sees the tree exactly as generated, so a directory rename can
never hide a file from it. Every entry yields an :class:`ItemResult`; no
single failure stops the walk.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
import os
from pathlib import Path
import shutil
import stat
import tempfile

from flakeinit.core.report import ItemResult, NullEmitter, ReportEmitter, SubstitutionReport
from flakeinit.core.types import Outcome

PLACEHOLDER_TOKEN = "project_name"

EXCLUDED_DIRS: frozenset[str] = frozenset({".git"})

log = logging.getLogger(__name__)

RelPath = tuple[str, ...]


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc) or type(exc).__name__


def _walk(root: Path, excluded: frozenset[str]) -> Iterator[tuple[Path, list[str], list[str]]]:
    """Top-down walk in sorted order, pruning excluded directories. Symlinks are not followed."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)
        yield Path(dirpath), dirnames, sorted(filenames)


def _write_replacing(path: Path, data: bytes) -> None:
    """Replace the file at *path* with *data* without ever leaving it half-written."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def replace_in_file(path: Path, token: str, replacement: str) -> ItemResult:
    """Replace every literal occurrence of *token* in the file at *path*."""
    try:
        data = path.read_bytes()
    except OSError as e:
        return ItemResult(path=path, outcome=Outcome.READ_FAILED, error=_describe(e))

    if token.encode("utf-8") not in data:
        return ItemResult(path=path, outcome=Outcome.SKIPPED)

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return ItemResult(path=path, outcome=Outcome.READ_FAILED, error="not valid UTF-8 text")

    occurrences = text.count(token)
    try:
        _write_replacing(path, text.replace(token, replacement).encode("utf-8"))
    except OSError as e:
        return ItemResult(
            path=path,
            outcome=Outcome.WRITE_FAILED,
            occurrences=occurrences,
            error=_describe(e),
        )

    return ItemResult(path=path, outcome=Outcome.CONTENT_REPLACED, occurrences=occurrences)


def rewrite_contents(
    root: Path,
    token: str,
    replacement: str,
    report: SubstitutionReport,
    emitter: ReportEmitter,
    excluded: frozenset[str] = EXCLUDED_DIRS,
) -> None:
    """Content pass over every regular file under *root*."""
    for dirpath, _, filenames in _walk(root, excluded):
        for name in filenames:
            path = dirpath / name
            try:
                mode = path.lstat().st_mode
            except OSError as e:
                result = ItemResult(path=path, outcome=Outcome.READ_FAILED, error=_describe(e))
            else:
                # symlinks, FIFOs, sockets and device nodes are never opened
                if not stat.S_ISREG(mode):
                    log.debug("Not a regular file, leaving contents alone: %s", path)
                    result = ItemResult(path=path, outcome=Outcome.SKIPPED)
                else:
                    result = replace_in_file(path, token, replacement)
                    if result.outcome == Outcome.SKIPPED:
                        log.debug("No occurrence of %r in %s", token, path)
            report.add(result)
            emitter.item(result)


def _find_named(root: Path, token: str, excluded: frozenset[str]) -> list[RelPath]:
    """Relative paths of every entry whose base name contains *token*, shallowest first."""
    matches: list[RelPath] = []
    for dirpath, dirnames, filenames in _walk(root, excluded):
        parent = dirpath.relative_to(root).parts
        matches.extend((*parent, name) for name in [*dirnames, *filenames] if token in name)
    # sort is stable, so entries of equal depth keep walk order
    matches.sort(key=len)
    return matches


def rewrite_names(
    root: Path,
    token: str,
    replacement: str,
    report: SubstitutionReport,
    emitter: ReportEmitter,
    excluded: frozenset[str] = EXCLUDED_DIRS,
) -> None:
    """Name pass. Each entry's location is resolved against the ancestors renamed so far."""
    new_names: dict[RelPath, str] = {}

    for parts in _find_named(root, token, excluded):
        parent = root.joinpath(
            *(new_names.get(parts[: i + 1], part) for i, part in enumerate(parts[:-1]))
        )
        old = parent / parts[-1]
        new = parent / parts[-1].replace(token, replacement)

        if new == old:
            result = ItemResult(path=old, outcome=Outcome.SKIPPED)
        elif os.path.lexists(new):
            result = ItemResult(
                path=old,
                outcome=Outcome.RENAME_FAILED,
                new_path=new,
                error="destination already exists",
            )
        else:
            try:
                old.rename(new)
            except OSError as e:
                result = ItemResult(
                    path=old, outcome=Outcome.RENAME_FAILED, new_path=new, error=_describe(e)
                )
            else:
                new_names[parts] = new.name
                result = ItemResult(path=old, outcome=Outcome.RENAMED, new_path=new)

        report.add(result)
        emitter.item(result)


def substitute(
    root: Path,
    token: str,
    replacement: str,
    emitter: ReportEmitter | None = None,
    excluded: frozenset[str] = EXCLUDED_DIRS,
) -> SubstitutionReport:
    """
    Replace *token* with *replacement* in file contents, then in file and directory names.

    Args:
        root: Directory to rewrite. The root path itself is never renamed.
        token: Literal placeholder to look for, usually :data:`PLACEHOLDER_TOKEN`.
        replacement: Text inserted verbatim for each occurrence.
        emitter: Receives every result as it is produced.
        excluded: Directory names skipped by both passes.

    Returns:
        The ordered results of both passes.
    """
    if not token:
        raise ValueError("token must not be empty.")
    if not root.is_dir():
        raise NotADirectoryError(f"{root} is not a directory.")

    emitter = emitter or NullEmitter()
    report = SubstitutionReport(token=token, replacement=replacement)

    log.debug("Rewriting contents under %s", root)
    rewrite_contents(root, token, replacement, report, emitter, excluded)
    log.debug("Rewriting names under %s", root)
    rewrite_names(root, token, replacement, report, emitter, excluded)

    log.debug(
        "Substitution finished: %d replaced, %d renamed, %d failed",
        len(report.replaced),
        len(report.renamed),
        len(report.failures),
    )
    return report
