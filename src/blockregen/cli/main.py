"""Blockregen CLI entry point: Click group with subcommands."""

import logging

import click

from blockregen import __version__


@click.group()
@click.version_option(version=__version__, prog_name="blockregen")
@click.option("-v", "--verbose", is_flag=True, help="Log loader details to stderr.")
def cli(verbose: bool) -> None:
    """Blockregen - validate and inspect block preset files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from blockregen.cli.validate import validate  # noqa: E402
from blockregen.cli.inspect import inspect  # noqa: E402
from blockregen.cli.roll import roll  # noqa: E402

cli.add_command(validate)
cli.add_command(inspect)
cli.add_command(roll)
