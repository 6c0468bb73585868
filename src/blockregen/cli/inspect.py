"""CLI command: blockregen inspect -- display loaded presets."""

from __future__ import annotations

import click

from blockregen.cli.common import load_manager, loader_options
from blockregen.drops.items import ExternalDropItem, MaterialDropItem
from blockregen.presets.preset import BlockPreset


def _echo_preset(preset: BlockPreset) -> None:
    click.echo(f"Preset: {preset.name}")
    click.echo(f"  target:     {preset.target_material}")
    if preset.replace_material:
        click.echo(f"  replace:    {preset.replace_material}")
    if preset.regen_material:
        click.echo(f"  regenerate: {preset.regen_material}")
    click.echo(f"  delay:      {preset.delay}")
    click.echo(f"  condition:  {preset.condition}")
    if preset.conditions.tools_required:
        click.echo(f"  tools:      {', '.join(preset.conditions.tools_required)}")

    rewards = preset.rewards
    click.echo(f"  money:      {rewards.money}")
    for drop in rewards.drops:
        if isinstance(drop, ExternalDropItem):
            label = f"{drop.prefix}:{drop.item_id}"
        elif isinstance(drop, MaterialDropItem):
            label = drop.material
        else:
            label = type(drop).__name__
        click.echo(f"  drop:       {label}  amount={drop.amount}  chance={drop.chance}%")
    for command in rewards.console_commands:
        click.echo(f"  console:    {command}")
    for command in rewards.player_commands:
        click.echo(f"  player:     {command}")


@click.command()
@click.argument("presets_file", type=click.Path(exists=True))
@click.option("--preset", "preset_name", default=None, help="Only show this preset.")
@loader_options
def inspect(
    presets_file: str,
    preset_name: str | None,
    strict: bool,
    jobs: bool,
    providers: tuple[str, ...],
) -> None:
    """Load PRESETS_FILE and display each preset's structure."""
    manager = load_manager(presets_file, strict, jobs, providers)

    if preset_name is not None:
        preset = manager.get_preset(preset_name)
        if preset is None:
            raise click.ClickException(f"No preset named '{preset_name}'")
        presets = [preset]
    else:
        presets = list(manager.presets.values())

    click.echo(f"Presets: {len(manager.presets)}")
    click.echo(f"Events:  {len(manager.events)}")
    for preset in presets:
        click.echo()
        _echo_preset(preset)
        event = manager.get_event(preset.name)
        if event is not None:
            click.echo(f"  event:      {event.display_name}")
