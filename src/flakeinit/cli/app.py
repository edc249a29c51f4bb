"""Typer CLI application for flakeinit."""

from __future__ import annotations

from dataclasses import replace
import logging
from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer import Exit, Option, Typer

import flakeinit
from flakeinit.catalog import Catalog, fetch_catalog
from flakeinit.cli._prompts import collect_config
from flakeinit.cli._renderer import ConsoleEmitter, print_summary
from flakeinit.core.config import ProjectConfig, Settings
from flakeinit.core.errors import FetchError, InvalidInputError, MaterializeError
from flakeinit.core.substitute import PLACEHOLDER_TOKEN, substitute
from flakeinit.finalize import finalize
from flakeinit.lib.process import format_command
from flakeinit.materialize import build_command, materialize

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> Exit:
    _console.print(f"[bold red]Error:[/] {escape(message)}")
    _console.print()
    return Exit(code=1)


def _print_templates(catalog: Catalog) -> None:
    _console.print()
    _console.print("[bold cyan]◆[/]  Available templates")
    _console.print("[dim]│[/]")
    for t in catalog.templates:
        ident = escape(t.identifier)
        _console.print(f"[dim]│[/]  [bold cyan]{ident:<22}[/] {escape(t.description)}")
    _console.print()


def _print_selection(config: ProjectConfig) -> None:
    _console.print("[bold cyan]◆[/]  You selected")
    _console.print(f"[dim]│[/]  Template: [green]{escape(config.template_id)}[/]")
    _console.print(f"[dim]│[/]  Mode: [green]{config.mode.label}[/]")
    _console.print(f"[dim]│[/]  Project name: [green]{escape(config.project_name)}[/]")
    _console.print(f"[dim]│[/]  Initialize Git: [green]{config.init_git}[/]")
    _console.print(f"[dim]│[/]  Clear README.md: [green]{config.clear_readme}[/]")
    _console.print("[dim]│[/]")


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"flakeinit v{flakeinit.__version__}")
        raise Exit()


@app.command()
def main(
    registry: Annotated[
        str | None,
        Option(
            "--registry",
            "-r",
            help="Flake reference of the template registry. Overrides $FLAKEINIT_REGISTRY.",
            show_default=False,
        ),
    ] = None,
    list_templates: Annotated[
        bool,
        Option("--list-templates", "-l", help="List all available templates and exit."),
    ] = False,
    verbose: Annotated[bool, Option("--verbose", "-v", help="Show debug logging.")] = False,
    version: Annotated[
        bool,
        Option(
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """Scaffold a project from a Nix flake template and fill in its project name."""
    _configure_logging(verbose)

    try:
        settings = Settings.from_env()
        if registry is not None:
            settings = replace(settings, registry=registry)
    except ValueError as e:
        raise _fail(str(e)) from None

    # Header
    _console.print()
    _console.print(f"[bold cyan]●[/]  flakeinit v{flakeinit.__version__}")
    _console.print("[dim]│[/]")
    _console.print(f"[bold green]◇[/]  Fetching templates from {escape(settings.registry)}...")

    try:
        catalog = fetch_catalog(settings)
    except FetchError as e:
        raise _fail(str(e)) from None

    if list_templates:
        _print_templates(catalog)
        return

    _console.print("[dim]│[/]")

    try:
        config = collect_config(catalog)
    except InvalidInputError as e:
        raise _fail(str(e)) from None

    _print_selection(config)

    # Materialize
    command = format_command(build_command(config, settings))
    _console.print(f"[bold green]◇[/]  Running [green]{escape(command)}[/] ...")
    try:
        root = materialize(config, settings, cwd=Path.cwd())
    except MaterializeError as e:
        raise _fail(str(e)) from None
    _console.print("[dim]│[/]  Created project [green]successfully[/]")
    _console.print("[dim]│[/]")

    # Substitute
    _console.print(
        f"[bold green]◇[/]  Replacing '{PLACEHOLDER_TOKEN}' with "
        f"[green]{escape(config.project_name)}[/]..."
    )
    emitter = ConsoleEmitter(_console, root=root)
    report = substitute(root, PLACEHOLDER_TOKEN, config.project_name, emitter=emitter)
    print_summary(_console, report)
    _console.print("[dim]│[/]")

    # Finalize
    if config.init_git or config.clear_readme:
        _console.print("[bold green]◇[/]  Finishing up...")
        finalize(root, config, settings, emitter=emitter)
        _console.print("[dim]│[/]")

    _console.print("[bold cyan]●[/]  Done!")
    _console.print()
