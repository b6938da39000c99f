from __future__ import annotations

import typer
from rich.markup import escape
from rich.tree import Tree

from taskchain.exit_codes import RESOLUTION_ERROR
from taskchain.graph import build_dependency_tree
from taskchain.logging import Logger
from taskchain.registry import RecipeNotFoundError, Registry


def show_tree(logger: Logger, registry: Registry, name: str) -> None:
    """
    Show dependency tree structure.
    """
    try:
        dep_tree = build_dependency_tree(registry, name)
    except RecipeNotFoundError as e:
        logger.error(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(RESOLUTION_ERROR)

    logger.info(_build_rich_tree(dep_tree))


def _build_rich_tree(dep_tree: dict) -> Tree:
    """
    Build a Rich Tree visualization from a dependency tree structure.

    Args:
        dep_tree: Nested dictionary representing recipe dependencies

    Returns:
        Rich Tree object for terminal display
    """
    label = escape(dep_tree["name"])
    if dep_tree.get("cycle"):
        label = f"[red]{label} (cycle)[/red]"
    tree = Tree(label)

    for dep in dep_tree.get("deps", []):
        tree.add(_build_rich_tree(dep))

    return tree
