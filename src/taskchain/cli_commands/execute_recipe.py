"""Execute recipe command implementation."""

from __future__ import annotations

from typing import Optional

import typer
from rich.markup import escape

from taskchain.cli_commands import get_action_failure_string, get_action_success_string
from taskchain.config import ConfigError, load_settings
from taskchain.exit_codes import KEYBOARD_INTERRUPT, RESOLUTION_ERROR
from taskchain.executor import ExecutionError, Executor
from taskchain.graph import CycleError, resolve_execution_order
from taskchain.logging import Logger
from taskchain.process_runner import ProcessRunner
from taskchain.registry import RecipeNotFoundError, Registry


def execute_recipe(
    logger: Logger,
    registry: Registry,
    process_runner: ProcessRunner,
    target: Optional[str] = None,
    dry_run: bool = False,
) -> None:
    """
    Resolve a target and run its dependency chain.

    Args:
    logger: Logger interface for output
    registry: Registry to resolve against
    process_runner: Runner command lines are dispatched through
    target: Recipe name or alias; the first declared recipe when omitted
    dry_run: Print command lines instead of running them

    Raises:
    typer.Exit: With RESOLUTION_ERROR if nothing could run, the failing
        command's exit code if a command failed, or KEYBOARD_INTERRUPT
    """
    if target is None:
        default = registry.default_recipe()
        if default is None:
            logger.error("[red]No recipes defined[/red]")
            raise typer.Exit(RESOLUTION_ERROR)
        target = default.name
        logger.trace(f"No target given, using default recipe '{target}'")

    try:
        order = resolve_execution_order(registry, target)
    except RecipeNotFoundError:
        logger.error(f"[red]Recipe not found: {escape(target)}[/red]")
        logger.info("\nAvailable recipes:")
        for name in registry.list_public():
            logger.info(f"  - {name}")
        raise typer.Exit(RESOLUTION_ERROR)
    except CycleError as e:
        logger.error(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(RESOLUTION_ERROR)

    logger.debug(f"Execution order: {' -> '.join(recipe.name for recipe in order)}")

    try:
        settings = load_settings(registry.project_root, logger)
    except ConfigError as e:
        logger.error(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(RESOLUTION_ERROR)

    logger.trace(f"Project root: {registry.project_root}")
    logger.trace(f"Shell: {escape(' '.join([settings.shell, *settings.args]))}")

    executor = Executor(registry, logger, process_runner, settings)
    try:
        executor.run(order, dry_run=dry_run)
    except ExecutionError as e:
        logger.error(f"[red]{get_action_failure_string()} {escape(str(e))}[/red]")
        raise typer.Exit(e.exit_code)
    except KeyboardInterrupt:
        logger.error(f"[red]{get_action_failure_string()} Interrupted[/red]")
        raise typer.Exit(KEYBOARD_INTERRUPT)

    logger.debug(
        f"[green]{get_action_success_string()} Recipe '{escape(target)}' completed successfully[/green]"
    )
