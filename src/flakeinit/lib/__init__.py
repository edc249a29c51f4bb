"""Helpers shared by the pipeline steps."""

from flakeinit.lib.process import run_command

__all__ = ["run_command"]
