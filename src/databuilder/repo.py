"""
Cache materializer

Functions that act on groups of entries in a repo cache:

- shorthand() makes entries reachable as `cache.bossie`
- load_fully() refreshes entries from the persistent store, typically
  so that their associations are loaded

Both take the same selection keywords:

    schemas=["animal", "procedure"]
    schema="animal"
    schema="animal", names=["bossie", "daisy"]
    schema="animal", name="bossie"

Referring to a schema that has no entries (or was never created) is a
no-op. Referring to a name that isn't in its schema raises MissingEntry,
and in that case nothing in the batch is applied.
"""

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

from databuilder import schema as schema_ops
from databuilder.cache import RESERVED_ALIASES, RepoCache, alias_for
from databuilder.errors import InvalidSelection, MissingEntry, ReservedAlias
from databuilder.options import combine_opts

logger = logging.getLogger(__name__)

SELECTION_DEFAULTS = {"schemas": None, "schema": None, "names": None, "name": None}


def _unique(items) -> tuple:
    """Drop repeats, keeping first-seen order, so each entry is acted on once."""
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class Selection:
    """A validated set of schemas, each with the names selected within it."""

    schemas: tuple[Hashable, ...] = ()
    names: tuple[str, ...] | None = None

    @classmethod
    def from_opts(cls, **opts) -> "Selection":
        opts = combine_opts(opts, SELECTION_DEFAULTS)
        given = {key for key, value in opts.items() if value is not None}

        if given == {"schemas"}:
            return cls(schemas=_unique(opts["schemas"]))
        if given == {"schema"}:
            return cls(schemas=(opts["schema"],))
        if given == {"schema", "names"}:
            return cls(schemas=(opts["schema"],), names=_unique(opts["names"]))
        if given == {"schema", "name"}:
            return cls(schemas=(opts["schema"],), names=(opts["name"],))

        raise InvalidSelection(
            "Expected one of schemas=[...], schema=..., schema=... with names=[...], "
            f"or schema=... with name=...; got {sorted(given)}"
        )

    def resolve(self, cache: RepoCache) -> list[tuple[Hashable, str, Any]]:
        """
        Return (schema, name, value) for every selected entry.

        Raises:
            MissingEntry: if an explicitly named entry doesn't exist
        """
        resolved = []
        for schema in self.schemas:
            names = self.names if self.names is not None else schema_ops.names(cache, schema)
            for name in names:
                value = schema_ops.get(cache, schema, name)
                if value is None:
                    raise MissingEntry(schema, name)
                resolved.append((schema, name, value))
        return resolved


def shorthand(cache: RepoCache, **selection) -> RepoCache:
    """
    Make selected entries available as attributes of the cache.

        cache = put(cache, "animal", "bossie", {"id": 5})
        cache = shorthand(cache, schema="animal")
        cache.bossie["id"]    # 5

    Names are lowercased and spaces become underscores, so
    "Bossie the Cow" is reachable as `cache.bossie_the_cow`. A name
    whose alias would hide a RepoCache attribute ("Fields") raises
    ReservedAlias.

    Aliases always show the current entry: a later put() or
    load_fully() is visible through them without calling this again.
    """
    entries = Selection.from_opts(**selection).resolve(cache)

    for schema, name, _ in entries:
        if alias_for(name) in RESERVED_ALIASES:
            raise ReservedAlias(schema, name, alias_for(name))

    shorthands = dict(cache.shorthands)
    for schema, name, _ in entries:
        # Re-registering moves the pair to the end, so it wins alias collisions
        shorthands.pop((schema, name), None)
        shorthands[(schema, name)] = alias_for(name)
        logger.debug("Registered shorthand %s for %r/%r", alias_for(name), schema, name)

    return cache.with_shorthands(shorthands)


def load_fully(
    cache: RepoCache,
    loader: Callable[[Hashable, Any], Any],
    **selection,
) -> RepoCache:
    """
    Replace selected entries with values fetched by `loader`.

    `loader(schema, value)` is called once per entry and returns the
    new value. "Fully loaded" is up to the loader; typically it
    re-fetches the row with its associations:

        def loader(schema, value):
            return animal_repository.get_with_procedures(value["id"])

        cache = load_fully(cache, loader, schema="animal")

    Every selected name is checked before the loader runs, so a
    MissingEntry leaves no partial work behind.
    """
    entries = Selection.from_opts(**selection).resolve(cache)

    reloaded: dict[Hashable, list[tuple[str, Any]]] = {}
    for schema, name, value in entries:
        reloaded.setdefault(schema, []).append((name, loader(schema, value)))

    for schema, pairs in reloaded.items():
        cache = schema_ops.replace(cache, schema, pairs)
        logger.debug("Reloaded %d %r entries", len(pairs), schema)

    return cache
