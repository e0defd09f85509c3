"""
Repo cache

The in-memory value that describes what a test has put into the
persistent store. It has three partitions:

    schemas     {"animal": {"bossie": {...}, "daisy": {...}}, ...}
    shorthands  {("animal", "bossie"): "bossie", ...}
    fields      caller-seeded values, e.g. a shared institution row

Aliases are never stored. `cache.bossie` looks up the registered
(schema, name) pair and reads the current entry, so an alias can't
disagree with the entry it names.
"""

from collections.abc import Hashable
from dataclasses import dataclass, field, fields, replace
from typing import Any


def alias_for(name: str) -> str:
    """Normalize an entry name into an alias identifier."""
    return name.lower().replace(" ", "_")


@dataclass(frozen=True)
class RepoCache:
    schemas: dict = field(default_factory=dict)
    shorthands: dict = field(default_factory=dict)
    fields: dict = field(default_factory=dict)

    @classmethod
    def empty(cls, **fields) -> "RepoCache":
        """Start a cache, optionally seeded with top-level fields."""
        return cls(fields=dict(fields))

    def with_fields(self, **fields) -> "RepoCache":
        return replace(self, fields={**self.fields, **fields})

    def with_schemas(self, schemas: dict) -> "RepoCache":
        return replace(self, schemas=schemas)

    def with_shorthands(self, shorthands: dict) -> "RepoCache":
        return replace(self, shorthands=shorthands)

    # =========================================================================
    # Alias access
    # =========================================================================

    @property
    def aliases(self) -> dict[str, Any]:
        """Current value of every registered alias."""
        result = {}
        for (schema, name), alias in self.shorthands.items():
            result[alias] = self.schemas.get(schema, {}).get(name)
        return result

    def alias_target(self, alias: str) -> tuple[Hashable, str] | None:
        """Return the (schema, name) pair an alias points at, if any.

        When two names normalize to the same alias, the most recently
        registered pair wins.
        """
        target = None
        for pair, registered in self.shorthands.items():
            if registered == alias:
                target = pair
        return target

    def __getitem__(self, key: str) -> Any:
        target = self.alias_target(key)
        if target is not None:
            schema, name = target
            return self.schemas[schema][name]
        return self.fields[key]

    def __contains__(self, key: str) -> bool:
        return self.alias_target(key) is not None or key in self.fields

    def __getattr__(self, key: str) -> Any:
        # Only reached for names that aren't real attributes
        if key.startswith("__"):
            raise AttributeError(key)
        try:
            return self[key]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no alias or field {key!r}"
            ) from None


# Aliases that dotted access could never reach, because a real attribute wins
RESERVED_ALIASES = frozenset(
    {f.name for f in fields(RepoCache)}
    | {attr for attr in dir(RepoCache) if not attr.startswith("_")}
)
