"""Shared CLI helpers: options that configure the loader and file loading."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import click

from blockregen.config.section import load_yaml_file
from blockregen.config.settings import LoaderSettings
from blockregen.drops.providers import ItemProviderRegistry, StaticItemProvider
from blockregen.errors import ParseError
from blockregen.presets.loader import PresetLoader
from blockregen.presets.manager import PresetManager


def loader_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every command that loads a presets file."""
    func = click.option(
        "--provider",
        "providers",
        multiple=True,
        metavar="PREFIX=ID[,ID...]",
        help="Register an external item provider knowing the given ids.",
    )(func)
    func = click.option("--jobs", is_flag=True, help="Enable 'jobs-check' requirements.")(func)
    func = click.option(
        "--strict", is_flag=True, help="Fail a preset on malformed numbers instead of defaulting."
    )(func)
    return func


def parse_providers(values: tuple[str, ...]) -> ItemProviderRegistry:
    registry = ItemProviderRegistry()
    for value in values:
        prefix, sep, ids = value.partition("=")
        if not sep or not prefix.strip():
            raise click.BadParameter(f"Expected PREFIX=ID[,ID...], got {value!r}", param_hint="--provider")
        registry.register(
            prefix.strip(), StaticItemProvider(i.strip() for i in ids.split(",") if i.strip())
        )
    return registry


def load_manager(
    presets_file: str, strict: bool, jobs: bool, providers: tuple[str, ...]
) -> PresetManager:
    """Read *presets_file* and load every preset; exits with code 1 on unreadable YAML."""
    loader = PresetLoader(
        items=parse_providers(providers),
        settings=LoaderSettings(strict=strict, jobs_enabled=jobs),
    )
    manager = PresetManager(loader)
    try:
        root = load_yaml_file(Path(presets_file))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    manager.load(root)
    return manager
