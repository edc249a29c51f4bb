"""Exception hierarchy for flakeinit."""


class FlakeInitError(Exception):
    """Base class for every error raised by flakeinit."""


class FetchError(FlakeInitError):
    """The template registry could not be queried or its output parsed."""


class MalformedCatalogError(FetchError):
    """The registry listing does not follow the expected template conventions."""


class InvalidInputError(FlakeInitError, ValueError):
    """An interactive answer did not match the accepted format."""


class MaterializeError(FlakeInitError):
    """The external project generator could not produce the project tree."""


class FinalizeError(FlakeInitError):
    """A post-init step (git init, README rewrite) failed. Never fatal."""
