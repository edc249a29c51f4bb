"""Command-line interface for flakeinit."""

from flakeinit.cli.app import app

__all__ = ["app"]
