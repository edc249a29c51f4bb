"""Core types, configuration and the placeholder substitution engine."""

from flakeinit.core.config import ProjectConfig, Settings
from flakeinit.core.errors import (
    FetchError,
    FinalizeError,
    FlakeInitError,
    InvalidInputError,
    MalformedCatalogError,
    MaterializeError,
)
from flakeinit.core.report import ItemResult, NullEmitter, ReportEmitter, SubstitutionReport
from flakeinit.core.substitute import PLACEHOLDER_TOKEN, substitute
from flakeinit.core.types import Mode, Outcome, Template

__all__ = [
    "PLACEHOLDER_TOKEN",
    "FetchError",
    "FinalizeError",
    "FlakeInitError",
    "InvalidInputError",
    "ItemResult",
    "MalformedCatalogError",
    "MaterializeError",
    "Mode",
    "NullEmitter",
    "Outcome",
    "ProjectConfig",
    "ReportEmitter",
    "Settings",
    "SubstitutionReport",
    "Template",
    "substitute",
]
