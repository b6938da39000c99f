from __future__ import annotations

import typer
import yaml
from rich.markup import escape
from rich.syntax import Syntax

from taskchain.exit_codes import RESOLUTION_ERROR
from taskchain.logging import Logger
from taskchain.registry import Registry


class _LiteralDumper(yaml.SafeDumper):
    """Dumper that writes multi-line strings in literal block style."""


def _literal_presenter(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_LiteralDumper.add_representer(str, _literal_presenter)


def show_recipe(logger: Logger, registry: Registry, name: str) -> None:
    """
    Show a recipe definition as highlighted YAML.
    """
    recipe = registry.get_recipe(name)
    if recipe is None:
        logger.error(f"[red]Recipe not found: {escape(name)}[/red]")
        raise typer.Exit(RESOLUTION_ERROR)

    logger.info(f"[bold]Recipe: {escape(recipe.name)}[/bold]")
    logger.info(f"Source: {escape(recipe.source_file) if recipe.source_file else '(built-in)'}\n")

    definition = {
        "desc": recipe.desc,
        "private": recipe.private,
        "aliases": list(recipe.aliases),
        "deps": list(recipe.deps),
        "cmd": "\n".join(recipe.cmds),
    }
    # Drop empty fields for cleaner display
    definition = {k: v for k, v in definition.items() if v}

    yaml_str = yaml.dump(
        {recipe.name: definition},
        Dumper=_LiteralDumper,
        default_flow_style=False,
        sort_keys=False,
    )
    logger.info(Syntax(yaml_str, "yaml", theme="ansi_light", line_numbers=False))
