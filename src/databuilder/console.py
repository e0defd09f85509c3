"""Rich rendering of a repo cache, for poking at a failing test."""

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from databuilder.cache import RepoCache

console = Console()


def render_cache(cache: RepoCache) -> Tree:
    """Build a tree of schemas, entries, aliases and seeded fields."""
    tree = Tree("[bold]repo cache[/]")

    schemas = tree.add("[bold]schemas[/]")
    for schema, entries in cache.schemas.items():
        branch = schemas.add(f"[cyan]{escape(str(schema))}[/]")
        for name, value in entries.items():
            alias = cache.shorthands.get((schema, name))
            # A pair that lost an alias collision isn't reachable through it
            if alias and cache.alias_target(alias) != (schema, name):
                alias = None
            label = f"{escape(repr(name))} [dim](.{alias})[/]" if alias else escape(repr(name))
            branch.add(f"{label}: {escape(repr(value))}")

    if cache.fields:
        fields = tree.add("[bold]fields[/]")
        for key, value in cache.fields.items():
            fields.add(f"[green]{escape(str(key))}[/]: {escape(repr(value))}")

    return tree


def print_cache(cache: RepoCache) -> None:
    console.print(render_cache(cache))
