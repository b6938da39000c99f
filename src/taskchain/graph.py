"""Dependency resolution by depth-first traversal."""

from __future__ import annotations

from taskchain.registry import Recipe, RecipeNotFoundError, Registry

__all__ = [
    "CycleError",
    "RecipeNotFoundError",
    "build_dependency_tree",
    "resolve_execution_order",
]


class CycleError(Exception):
    """Raised when a dependency cycle is detected."""

    def __init__(self, cycle: list[str]):
        super().__init__(f"Dependency cycle detected: {' -> '.join(cycle)}")
        self.cycle = cycle


def resolve_execution_order(registry: Registry, target: str) -> list[Recipe]:
    """Resolve execution order for a recipe and its dependencies.

    Each recipe is recorded after all of its dependencies, and only the first
    time it is reached, so a shared ancestor runs once.

    Args:
        registry: Registry containing all recipes
        target: Name or alias of the recipe to execute

    Returns:
        Recipes in execution order (dependencies first, target last)

    Raises:
        RecipeNotFoundError: If the target doesn't exist
        CycleError: If a dependency cycle is reachable from the target
    """
    root = registry.lookup(target)

    order: list[Recipe] = []
    finished: set[str] = set()
    path: list[str] = []

    def visit(recipe: Recipe) -> None:
        if recipe.name in finished:
            return
        if recipe.name in path:
            raise CycleError(path[path.index(recipe.name):] + [recipe.name])

        path.append(recipe.name)
        for dep in recipe.deps:
            visit(registry.lookup(dep))
        path.pop()

        finished.add(recipe.name)
        order.append(recipe)

    visit(root)
    return order


def build_dependency_tree(registry: Registry, target: str) -> dict:
    """Build a tree structure representing dependencies for visualization.

    Args:
        registry: Registry containing all recipes
        target: Name or alias of the recipe to build the tree for

    Returns:
        Nested dictionary with "name" and "deps" keys; a node that would
        re-enter the current path is returned with "cycle": True and no deps
    """
    root = registry.lookup(target)
    visiting: set[str] = set()

    def build_tree(recipe: Recipe) -> dict:
        if recipe.name in visiting:
            return {"name": recipe.name, "deps": [], "cycle": True}

        visiting.add(recipe.name)
        tree = {
            "name": recipe.name,
            "deps": [build_tree(registry.lookup(dep)) for dep in recipe.deps],
        }
        visiting.remove(recipe.name)

        return tree

    return build_tree(root)
