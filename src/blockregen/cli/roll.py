"""CLI command: blockregen roll -- evaluate one preset against a context."""

from __future__ import annotations

import random
import sys

import click
import yaml

from blockregen.cli.common import load_manager, loader_options
from blockregen.errors import FormulaError
from blockregen.model.context import Context


def _parse_context(values: tuple[str, ...]) -> Context:
    data = {}
    for value in values:
        key, sep, raw = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got {value!r}", param_hint="--set")
        data[key.strip()] = yaml.safe_load(raw) if raw else ""
    return Context(data)


@click.command()
@click.argument("presets_file", type=click.Path(exists=True))
@click.argument("preset_name")
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE", help="Context value (YAML-typed).")
@click.option("--seed", type=int, default=None, help="Seed for reproducible rolls.")
@click.option("--event", "with_event", is_flag=True, help="Apply the preset's event as active.")
@loader_options
def roll(
    presets_file: str,
    preset_name: str,
    assignments: tuple[str, ...],
    seed: int | None,
    with_event: bool,
    strict: bool,
    jobs: bool,
    providers: tuple[str, ...],
) -> None:
    """Check PRESET_NAME's conditions against a context and roll its rewards."""
    manager = load_manager(presets_file, strict, jobs, providers)
    preset = manager.get_preset(preset_name)
    if preset is None:
        raise click.ClickException(f"No preset named '{preset_name}'")

    rng = random.Random(seed)
    context = _parse_context(assignments).derive({"random": rng})
    event = manager.get_event(preset_name) if with_event else None
    if event is not None:
        event.active = True

    try:
        outcome = preset.resolve(context, rng, event=event)
    except FormulaError as exc:
        click.echo(f"Evaluation error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Condition: {preset.condition}")
    if outcome is None:
        click.echo("Result: conditions not met")
        sys.exit(2)

    click.echo("Result: conditions met")
    for drop in outcome.drops:
        click.echo(f"  drop: {drop.item}  x{drop.amount}  exp={drop.experience}")
    click.echo(f"  money: {outcome.money:g}")
    for command in outcome.console_commands:
        click.echo(f"  console: {command}")
    for command in outcome.player_commands:
        click.echo(f"  player: {command}")
