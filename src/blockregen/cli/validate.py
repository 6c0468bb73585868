"""CLI command: blockregen validate -- load a presets file and report problems."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from blockregen.cli.common import load_manager, loader_options
from blockregen.model.diagnostic import Severity


@click.command()
@click.argument("presets_file", type=click.Path(exists=True))
@loader_options
def validate(presets_file: str, strict: bool, jobs: bool, providers: tuple[str, ...]) -> None:
    """Load every preset in PRESETS_FILE and print diagnostics.

    Exits with code 0 if every preset and event loaded, or code 1 if any
    preset or event was dropped.
    """
    manager = load_manager(presets_file, strict, jobs, providers)
    diagnostics = manager.loader.diagnostics.items
    name = Path(presets_file).name

    if not diagnostics:
        click.echo(
            f"OK: {name} is valid ({len(manager.presets)} preset(s), {len(manager.events)} event(s))"
        )
        sys.exit(0)

    for diag in diagnostics:
        click.echo(str(diag))

    errors = [d for d in diagnostics if d.severity is Severity.ERROR]
    warnings = [d for d in diagnostics if d.severity is Severity.WARNING]
    click.echo()
    click.echo(
        f"Summary: {len(manager.presets)} preset(s) loaded, "
        f"{len(errors)} error(s), {len(warnings)} warning(s)"
    )

    if errors:
        sys.exit(1)
    sys.exit(0)
