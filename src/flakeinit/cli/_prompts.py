"""Clack-style line prompts using Rich."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape

from flakeinit.catalog import Catalog
from flakeinit.core.config import ProjectConfig
from flakeinit.core.errors import InvalidInputError
from flakeinit.core.selection import parse_bool, parse_mode, parse_project_name
from flakeinit.core.types import Mode

_console = Console()


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    if not sys.stdout.isatty():
        return
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _read_line(prompt: str = "> ") -> str:
    _console.print("[dim]│[/]  ", end="")
    try:
        return input(prompt)
    except EOFError:
        raise InvalidInputError("Invalid input: no answer given") from None


def _answered(question: str, display: str, lines: int) -> None:
    """Replace the *lines* of an open question with its collapsed, answered form."""
    _clear_lines(lines)
    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {escape(display)}")
    _print_bar()


def _ask(question: str) -> str:
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()
    return _read_line()


def prompt_template(catalog: Catalog) -> str:
    """Show the numbered template list and return the chosen identifier."""
    question = "What template do you want to use?"
    _console.print(f"[bold cyan]◆[/]  {question}")
    for i, template in enumerate(catalog.templates, start=1):
        _console.print(f"[dim]│[/]  [blue]{i:>2})[/] {escape(template.description)}")
    _print_bar()
    answer = _read_line("Pick a number or enter the code for the template: ")

    identifier = catalog.resolve(answer)
    descriptions = {t.identifier: t.description for t in catalog.templates}
    display = descriptions.get(identifier, identifier)
    _answered(question, display, len(catalog.templates) + 3)
    return identifier


def prompt_mode() -> Mode:
    question = "Create a new project or initialize one in this folder? (new/init)"
    mode = parse_mode(_ask(question))
    _answered(question, mode.label, 3)
    return mode


def prompt_project_name() -> str:
    question = "What do you want to name your project?"
    name = parse_project_name(_ask(question))
    _answered(question, name, 3)
    return name


def _confirm(question: str) -> bool:
    """Yes/no prompt without a default: an empty answer is invalid."""
    result = parse_bool(_ask(f"{question} [y/n]"))
    _answered(f"{question} [y/n]", "Yes" if result else "No", 3)
    return result


def prompt_init_git() -> bool:
    return _confirm("Initialize a Git repository (git init)?")


def prompt_clear_readme() -> bool:
    return _confirm("Clear the README.md file?")


def collect_config(catalog: Catalog) -> ProjectConfig:
    """Run the five prompts in order. The first invalid answer ends the session."""
    return ProjectConfig(
        template_id=prompt_template(catalog),
        mode=prompt_mode(),
        project_name=prompt_project_name(),
        init_git=prompt_init_git(),
        clear_readme=prompt_clear_readme(),
    )
