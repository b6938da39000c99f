"""Recipe definitions and the read-only recipe registry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable


class RegistryError(ValueError):
    """Raised when recipe definitions are inconsistent."""

    pass


class RecipeNotFoundError(LookupError):
    """Raised when a name matches neither a recipe nor an alias."""

    def __init__(self, name: str):
        super().__init__(f"Recipe not found: {name}")
        self.name = name


@dataclass(frozen=True)
class Recipe:
    """A named unit of work: dependencies first, then command lines in order."""

    name: str
    cmds: tuple[str, ...] = ()
    desc: str = ""
    deps: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    private: bool = False
    source_file: str = ""  # Empty for the built-in table


class Registry:
    """Immutable mapping of recipe names and aliases to recipes.

    Declaration order is preserved: it drives listing order and the default
    recipe.
    """

    def __init__(
        self,
        recipes: Iterable[Recipe],
        project_root: Path,
        source_file: Path | None = None,
    ):
        """Build and validate the registry.

        Args:
            recipes: Recipes in declaration order
            project_root: Directory command lines run in
            source_file: Recipe file the definitions came from (None for built-ins)

        Raises:
            RegistryError: On duplicate names, colliding aliases or unknown dependencies
        """
        self.project_root = project_root
        self.source_file = source_file
        self._recipes: dict[str, Recipe] = {}
        self._aliases: dict[str, str] = {}

        for recipe in recipes:
            if recipe.name in self._recipes:
                raise RegistryError(f"Duplicate recipe name: {recipe.name}")
            if recipe.name in self._aliases:
                raise RegistryError(
                    f"Recipe '{recipe.name}' is shadowed by an alias of "
                    f"'{self._aliases[recipe.name]}'"
                )
            self._recipes[recipe.name] = recipe

            for alias in recipe.aliases:
                if alias in self._recipes:
                    raise RegistryError(
                        f"Alias '{alias}' of recipe '{recipe.name}' collides with a recipe name"
                    )
                if alias in self._aliases:
                    raise RegistryError(
                        f"Alias '{alias}' is defined for both '{self._aliases[alias]}' "
                        f"and '{recipe.name}'"
                    )
                self._aliases[alias] = recipe.name

        for recipe in self._recipes.values():
            for dep in recipe.deps:
                if dep not in self._recipes:
                    raise RegistryError(
                        f"Recipe '{recipe.name}' depends on unknown recipe '{dep}'"
                    )

    def __len__(self) -> int:
        return len(self._recipes)

    def get_recipe(self, name: str) -> Recipe | None:
        """Get a recipe by canonical name or alias, or None if neither matches."""
        canonical = self._aliases.get(name, name)
        return self._recipes.get(canonical)

    def lookup(self, name: str) -> Recipe:
        """Get a recipe by canonical name or alias.

        Raises:
            RecipeNotFoundError: If no recipe or alias has this name
        """
        recipe = self.get_recipe(name)
        if recipe is None:
            raise RecipeNotFoundError(name)
        return recipe

    def recipe_names(self) -> list[str]:
        """All canonical recipe names in declaration order."""
        return list(self._recipes.keys())

    def list_public(self) -> list[str]:
        """Names of non-private recipes in declaration order."""
        return [recipe.name for recipe in self._recipes.values() if not recipe.private]

    def default_recipe(self) -> Recipe | None:
        """The first declared recipe, whatever its visibility."""
        return next(iter(self._recipes.values()), None)

    def aliases_for(self, name: str) -> list[str]:
        recipe = self.get_recipe(name)
        return list(recipe.aliases) if recipe else []
