"""Command-line interface for taskchain."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from taskchain import __version__
from taskchain.cli_commands.execute_recipe import execute_recipe
from taskchain.cli_commands.list_recipes import list_recipes
from taskchain.cli_commands.show_recipe import show_recipe
from taskchain.cli_commands.show_tree import show_tree
from taskchain.console_logger import ConsoleLogger
from taskchain.logging import LogLevel, parse_log_level
from taskchain.parser import get_registry
from taskchain.process_runner import PassthroughProcessRunner

app = typer.Typer(
    help="taskchain - run named recipes and their dependencies, in order",
    add_completion=False,
    no_args_is_help=False,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"taskchain version {__version__}")
        raise typer.Exit()


def _log_level_callback(value: str) -> LogLevel:
    try:
        return parse_log_level(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command()
def main(
    target: Optional[str] = typer.Argument(
        None,
        help="Recipe name or alias to run (defaults to the first declared recipe)",
        show_default=False,
    ),
    list_opt: bool = typer.Option(
        False, "--list", "-l", help="List public recipes and exit"
    ),
    show: Optional[str] = typer.Option(
        None, "--show", metavar="RECIPE", help="Show a recipe definition and exit"
    ),
    tree: Optional[str] = typer.Option(
        None, "--tree", metavar="RECIPE", help="Show a recipe's dependency tree and exit"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print commands without running them"
    ),
    tasks_file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Recipe file to use instead of searching for one"
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        "-L",
        help="Verbosity: fatal, error, warn, info, debug or trace",
        callback=_log_level_callback,
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Run TARGET and the recipes it depends on, stopping at the first failure."""
    logger = ConsoleLogger(console, log_level)
    registry = get_registry(logger, tasks_file)

    if list_opt:
        list_recipes(logger, registry)
        return

    if show is not None:
        show_recipe(logger, registry, show)
        return

    if tree is not None:
        show_tree(logger, registry, tree)
        return

    execute_recipe(
        logger,
        registry,
        PassthroughProcessRunner(logger),
        target=target,
        dry_run=dry_run,
    )


if __name__ == "__main__":
    app()
