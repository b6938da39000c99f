"""Parse recipe YAML files into a Registry."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml

from taskchain.builtin import BUILTIN_TASKS
from taskchain.exit_codes import RESOLUTION_ERROR
from taskchain.logging import Logger
from taskchain.registry import Recipe, Registry, RegistryError

RECIPE_FILE_NAMES = ["taskchain.yaml", "taskchain.yml", "tc.yaml"]

_RECIPE_KEYS = {"cmd", "desc", "deps", "aliases", "private"}


def find_recipe_file(start_dir: Path | None = None) -> Path | None:
    """Find a recipe file in the start directory or its parents.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to recipe file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        for filename in RECIPE_FILE_NAMES:
            recipe_path = current / filename
            if recipe_path.is_file():
                return recipe_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _as_str_list(value: Any, field_name: str, recipe_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise RegistryError(
        f"Recipe '{recipe_name}': '{field_name}' must be a string or a list of strings"
    )


def _parse_cmd(value: Any, recipe_name: str) -> list[str]:
    """Split a recipe body into command lines, dropping blank lines."""
    if isinstance(value, str):
        lines = value.splitlines()
    else:
        lines = _as_str_list(value, "cmd", recipe_name)
    return [line.strip() for line in lines if line.strip()]


def _parse_recipe(name: Any, data: Any, source_file: str) -> Recipe:
    if not isinstance(name, str) or not name:
        raise RegistryError(f"Recipe names must be non-empty strings, got {name!r}")

    # A bare string is shorthand for a recipe with only a body
    if isinstance(data, str):
        data = {"cmd": data}
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RegistryError(f"Recipe '{name}' must be a mapping")

    unknown = set(data) - _RECIPE_KEYS
    if unknown:
        raise RegistryError(
            f"Recipe '{name}' has unknown field(s): {', '.join(sorted(unknown))}"
        )

    desc = data.get("desc", "")
    if not isinstance(desc, str):
        raise RegistryError(f"Recipe '{name}': 'desc' must be a string")

    private = data.get("private", False)
    if not isinstance(private, bool):
        raise RegistryError(f"Recipe '{name}': 'private' must be a boolean")

    return Recipe(
        name=name,
        cmds=tuple(_parse_cmd(data.get("cmd"), name)),
        desc=desc,
        deps=tuple(_as_str_list(data.get("deps"), "deps", name)),
        aliases=tuple(_as_str_list(data.get("aliases"), "aliases", name)),
        private=private,
        source_file=source_file,
    )


def build_registry(
    tasks: Any, project_root: Path, source_file: Path | None = None
) -> Registry:
    """Build a Registry from a `tasks` mapping.

    Raises:
        RegistryError: If the mapping or any recipe in it is invalid
    """
    if tasks is None:
        tasks = {}
    if not isinstance(tasks, dict):
        raise RegistryError("'tasks' must be a mapping of recipe names to definitions")

    source = str(source_file) if source_file else ""
    recipes = [_parse_recipe(name, data, source) for name, data in tasks.items()]
    return Registry(recipes, project_root=project_root, source_file=source_file)


def parse_recipe_file(recipe_path: Path) -> Registry:
    """Parse a recipe file into a Registry rooted at the file's directory.

    Raises:
        FileNotFoundError: If recipe file doesn't exist
        yaml.YAMLError: If YAML is invalid
        RegistryError: If recipe structure is invalid
    """
    if not recipe_path.exists():
        raise FileNotFoundError(f"Recipe file not found: {recipe_path}")

    with open(recipe_path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RegistryError(f"Recipe file must contain a mapping: {recipe_path}")

    unknown = set(data) - {"tasks"}
    if unknown:
        raise RegistryError(
            f"Unknown top-level key(s) in {recipe_path.name}: {', '.join(sorted(unknown))}"
        )

    return build_registry(
        data.get("tasks"), project_root=recipe_path.parent.resolve(), source_file=recipe_path
    )


def builtin_registry(project_root: Path | None = None) -> Registry:
    """Registry for the built-in recipe table, rooted at the working directory."""
    return build_registry(BUILTIN_TASKS, project_root=project_root or Path.cwd())


def get_registry(logger: Logger, tasks_file: Optional[str] = None) -> Registry:
    """Load the registry for this invocation.

    An explicit file wins, then a recipe file discovered from the working
    directory, then the built-in table. Load errors are reported and end the
    invocation.
    """
    if tasks_file:
        recipe_path: Path | None = Path(tasks_file)
        if not recipe_path.exists():
            logger.error(f"[red]Recipe file not found: {tasks_file}[/red]")
            raise typer.Exit(RESOLUTION_ERROR)
    else:
        recipe_path = find_recipe_file()

    if recipe_path is None:
        logger.trace("No recipe file found, using built-in recipes")
        return builtin_registry()

    logger.trace(f"Loading recipes from {recipe_path}")
    try:
        return parse_recipe_file(recipe_path)
    except (OSError, yaml.YAMLError, RegistryError) as e:
        logger.error(f"[red]Error parsing recipe file: {e}[/red]")
        raise typer.Exit(RESOLUTION_ERROR)
