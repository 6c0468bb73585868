"""Command-line interface."""

from blockregen.cli.main import cli

__all__ = ["cli"]
