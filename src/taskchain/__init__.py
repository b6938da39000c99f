"""taskchain - a task runner that executes recipes in dependency order."""

__version__ = "0.1.0"

from taskchain.executor import ExecutionError, Executor
from taskchain.graph import CycleError, build_dependency_tree, resolve_execution_order
from taskchain.parser import build_registry, builtin_registry, find_recipe_file, parse_recipe_file
from taskchain.registry import Recipe, RecipeNotFoundError, Registry, RegistryError

__all__ = [
    "__version__",
    "Executor",
    "ExecutionError",
    "CycleError",
    "build_dependency_tree",
    "resolve_execution_order",
    "build_registry",
    "builtin_registry",
    "find_recipe_file",
    "parse_recipe_file",
    "Recipe",
    "RecipeNotFoundError",
    "Registry",
    "RegistryError",
]
