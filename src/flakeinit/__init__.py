"""flakeinit: scaffold projects from Nix flake templates."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("flakeinit")
except PackageNotFoundError:
    __version__ = "0.0.0"
