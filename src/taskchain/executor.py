"""Sequential, fail-fast recipe execution."""

from __future__ import annotations

from typing import Iterable, Optional

from rich.markup import escape

from taskchain.config import Settings, platform_default_settings
from taskchain.exit_codes import from_returncode
from taskchain.graph import resolve_execution_order
from taskchain.logging import Logger
from taskchain.process_runner import ProcessRunner
from taskchain.registry import Recipe, Registry

QUIET_PREFIX = "@"


class ExecutionError(Exception):
    """Raised when a command line exits non-zero."""

    def __init__(self, recipe_name: str, exit_code: int, command: str = ""):
        super().__init__(
            f"Recipe '{recipe_name}' failed with exit code {exit_code}"
            + (f": {command}" if command else "")
        )
        self.recipe_name = recipe_name
        self.exit_code = exit_code
        self.command = command


def split_quiet_prefix(line: str) -> tuple[bool, str]:
    """Strip a leading '@' from a command line.

    Returns:
        (quiet, command) where quiet means the line is not echoed
    """
    if line.startswith(QUIET_PREFIX):
        return True, line[len(QUIET_PREFIX):].lstrip()
    return False, line


class Executor:
    """Runs resolved recipe sequences one command line at a time."""

    def __init__(
        self,
        registry: Registry,
        logger: Logger,
        process_runner: ProcessRunner,
        settings: Optional[Settings] = None,
    ):
        """Initialize executor.

        Args:
            registry: Registry containing all recipes
            logger: Logger for command echo and diagnostics
            process_runner: Runner each command line is dispatched through
            settings: Shell settings (defaults to the platform shell)
        """
        self.registry = registry
        self.logger = logger
        self.process_runner = process_runner
        self.settings = settings or platform_default_settings()

    def execute_recipe(self, target: str, dry_run: bool = False) -> list[Recipe]:
        """Resolve a target and run it with its dependencies.

        Raises:
            RecipeNotFoundError: If the target doesn't exist (nothing runs)
            CycleError: If a dependency cycle is found (nothing runs)
            ExecutionError: If a command line fails
        """
        order = resolve_execution_order(self.registry, target)
        self.run(order, dry_run=dry_run)
        return order

    def run(self, order: Iterable[Recipe], dry_run: bool = False) -> None:
        """Run recipes in the given order, stopping at the first failure.

        Args:
            order: Recipes in execution order
            dry_run: If True, echo every command line without dispatching it

        Raises:
            ExecutionError: If a command line exits non-zero; nothing after it runs
        """
        for recipe in order:
            self._run_recipe(recipe, dry_run)

    def _run_recipe(self, recipe: Recipe, dry_run: bool) -> None:
        self.logger.debug(f"[dim]Running recipe: {recipe.name}[/dim]")

        for line in recipe.cmds:
            quiet, command = split_quiet_prefix(line)
            if dry_run or not quiet:
                self.logger.info(f"[bold]{escape(command)}[/bold]")
            if dry_run:
                continue

            result = self.process_runner.run(
                self.settings.command_for(command),
                cwd=self.registry.project_root,
                check=False,
            )
            if result.returncode != 0:
                raise ExecutionError(recipe.name, from_returncode(result.returncode), command)
