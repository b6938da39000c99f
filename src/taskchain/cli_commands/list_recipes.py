from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from taskchain.logging import Logger
from taskchain.registry import Registry


def list_recipes(logger: Logger, registry: Registry) -> None:
    """
    List public recipes in declaration order, with aliases and descriptions.
    """
    public_names = registry.list_public()

    logger.info("Available recipes:")
    if not public_names:
        return

    # Borderless table so each recipe stays on its own line
    table = Table(show_edge=False, show_header=False, box=None, padding=(0, 2))
    table.add_column(
        "Recipe",
        style="bold cyan",
        no_wrap=True,
        width=max(len(name) for name in public_names),
    )
    table.add_column("Aliases", style="dim", no_wrap=True)
    table.add_column("Description", style="white", no_wrap=True, overflow="ellipsis")

    for name in public_names:
        recipe = registry.lookup(name)
        aliases = ", ".join(recipe.aliases)
        table.add_row(
            name,
            f"\\[alias: {escape(aliases)}]" if aliases else "",
            escape(recipe.desc),
        )

    logger.info(table)
