"""Template catalog: lists the templates exposed by the flake registry."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging

from flakeinit.core.config import Settings
from flakeinit.core.errors import FetchError, MalformedCatalogError
from flakeinit.core.selection import parse_template_choice
from flakeinit.core.types import Template
from flakeinit.lib.process import run_command, stderr_tail

BLANK_TEMPLATE_KEY = "default"
BLANK_DESCRIPTION = "Empty/Blank"
DESCRIPTION_PREFIX = "Nix Flake Template for "

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Catalog:
    """
    Templates offered for selection.

    Attributes:
        templates: Listed templates, in registry order, unique by description.
        identifiers: Every identifier in the registry, including those hidden by
            description deduplication.
    """

    templates: list[Template]
    identifiers: frozenset[str] = field(default_factory=frozenset)

    def resolve(self, choice: str) -> str:
        """Map a 1-based index or literal identifier to a registry identifier."""
        return parse_template_choice(choice, self.templates, self.identifiers)


def _describe(key: str, value: object) -> str:
    if key == BLANK_TEMPLATE_KEY:
        return BLANK_DESCRIPTION

    description = value.get("description") if isinstance(value, dict) else None
    if not isinstance(description, str):
        raise MalformedCatalogError(f"Template '{key}' has no description.")
    if not description.startswith(DESCRIPTION_PREFIX):
        raise MalformedCatalogError(
            f"Template '{key}' description {description!r} does not start with "
            f"{DESCRIPTION_PREFIX!r}."
        )
    return description.removeprefix(DESCRIPTION_PREFIX)


def parse_catalog(raw: str) -> Catalog:
    """Build a catalog from the JSON printed by ``nix flake show --json``."""
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FetchError(f"Registry output is not valid JSON: {e}") from e

    templates_json = parsed.get("templates") if isinstance(parsed, dict) else None
    if not isinstance(templates_json, dict):
        raise MalformedCatalogError("Registry output has no 'templates' object.")

    templates: list[Template] = []
    seen: set[str] = set()
    for key, value in templates_json.items():
        description = _describe(key, value)
        if description in seen:
            log.debug("Hiding template '%s': duplicate description %r", key, description)
            continue
        seen.add(description)
        templates.append(Template(identifier=key, description=description))

    return Catalog(templates=templates, identifiers=frozenset(templates_json))


def fetch_catalog(settings: Settings) -> Catalog:
    """Query the registry and return its deduplicated template list."""
    args = [
        settings.nix,
        "--extra-experimental-features",
        settings.experimental_features,
        "flake",
        "show",
        "--json",
        settings.registry,
    ]
    try:
        result = run_command(args)
    except OSError as e:
        raise FetchError(f"Failed to run {settings.nix}: {e}") from e

    if result.returncode != 0:
        detail = stderr_tail(result)
        message = f"Failed to fetch templates from {settings.registry}"
        raise FetchError(f"{message}: {detail}" if detail else message)

    catalog = parse_catalog(result.stdout)
    log.debug("Fetched %d templates from %s", len(catalog.templates), settings.registry)
    return catalog
