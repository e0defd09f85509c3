"""
Schema accessor

Functions for working with the schemas partition of a repo cache. A
schema is one kind of entity ("animal", "procedure"); an entry is one
instance of it, keyed by a name the test chooses ("bossie").

Every function returns a new cache; none modifies its argument.
"""

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any

from databuilder.cache import RepoCache


def _merge(base: dict, updates: dict, depth: int) -> dict:
    """
    Merge `updates` into a copy of `base`, descending `depth` levels.

    Below that depth values replace each other outright, so entry
    values are stored exactly as given.
    """
    merged = dict(base)
    for key, value in updates.items():
        if depth > 1 and isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value, depth - 1)
        else:
            merged[key] = value
    return merged


def put(cache: RepoCache, schema: Hashable, name: str, value: Any) -> RepoCache:
    """
    Put a value into the cache.

        put(cache, "animal", "bossie", {"id": 1, "name": "bossie"})

    If the schema is missing, it is created. If the name is already
    present, its value is overwritten.

    See also create_if_needed().
    """
    return replace(cache, schema, [(name, value)])


def replace(
    cache: RepoCache,
    schema: Hashable,
    pairs: Iterable[tuple[str, Any]] | Mapping[str, Any],
) -> RepoCache:
    """
    Install several (name, value) pairs in one schema, as with put().
    """
    entries = dict(pairs)
    schemas = _merge(cache.schemas, {schema: entries}, depth=2)
    return cache.with_schemas(schemas)


def get(cache: RepoCache, schema: Hashable, name: str) -> Any | None:
    """
    Get a value from the cache, or None if the schema or name is missing.

    Test code usually prefers the aliases installed by repo.shorthand().
    """
    return cache.schemas.get(schema, {}).get(name)


def create_if_needed(
    cache: RepoCache,
    schema: Hashable,
    name: str,
    producer: Callable[[], Any],
) -> RepoCache:
    """
    Like put(), but only if nothing is stored under the name yet.

    `producer` is called (once) only when the entry is missing. It
    typically inserts a row into the database and returns it, so
    builders can be chained without creating duplicates:

        cache = procedure(cache, "haltering")
        cache = reservation_for(cache, ["bossie"], ["haltering"])

    Here reservation_for() calls animal("bossie"), which creates an
    animal, and procedure("haltering"), which does nothing.
    """
    if get(cache, schema, name) is not None:
        return cache
    return put(cache, schema, name, producer())


def names(cache: RepoCache, schema: Hashable) -> list[str]:
    """Return all names in the schema, or [] if the schema doesn't exist."""
    return list(cache.schemas.get(schema, {}))
