"""Parsing of the interactive answers. Each parser accepts one line or raises InvalidInputError."""

from __future__ import annotations

from flakeinit.core.errors import InvalidInputError
from flakeinit.core.types import Mode, Template

_MODES: dict[str, Mode] = {
    "new": Mode.CREATE,
    "n": Mode.CREATE,
    "init": Mode.INIT,
    "i": Mode.INIT,
}

_TRUE = frozenset({"y", "yes", "true"})
_FALSE = frozenset({"n", "no", "false"})


def parse_template_choice(answer: str, templates: list[Template], known: frozenset[str]) -> str:
    """
    Resolve a template answer to a registry identifier.

    Args:
        answer: A 1-based index into *templates* or a literal identifier.
        templates: The listed (deduplicated) templates.
        known: Every identifier the registry exposes, listed or not.
    """
    choice = answer.strip()
    if not choice:
        raise InvalidInputError(
            "Invalid input: pick a number from the list or enter a template code"
        )

    # str.isdigit also accepts superscripts and other scripts' digits, which int() rejects
    if choice.isascii() and choice.isdigit():
        index = int(choice)
        if not 1 <= index <= len(templates):
            raise InvalidInputError(
                f"Invalid input: enter a number between 1 and {len(templates)}, got {choice}"
            )
        return templates[index - 1].identifier

    if choice in known:
        return choice
    raise InvalidInputError(f"Invalid input: unknown template '{choice}'")


def parse_mode(answer: str) -> Mode:
    try:
        return _MODES[answer.strip().lower()]
    except KeyError:
        raise InvalidInputError(
            "Invalid input: enter 'new' to create a new project; "
            "'init' to initialize one in this folder"
        ) from None


def parse_project_name(answer: str) -> str:
    """The name becomes a directory name, so it must be a single non-empty path component."""
    name = answer.strip()
    if not name:
        raise InvalidInputError("Invalid input: the project name must not be empty")
    if name in (".", "..") or "/" in name or "\\" in name or "\0" in name:
        raise InvalidInputError(f"Invalid input: '{name}' is not usable as a directory name")
    return name


def parse_bool(answer: str) -> bool:
    value = answer.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InvalidInputError(
        "Invalid input: enter 'y', 'yes', or 'true' to agree; "
        "'n', 'no', or 'false' to disagree"
    )
