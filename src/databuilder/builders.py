"""
Builder combinators

A test data builder usually has a singular function per schema that
makes sure one named entry exists:

    def animal(cache, name, **opts):
        return create_if_needed(cache, "animal", name, lambda: insert_animal(name, **opts))

make_plural_builder() derives the version that takes a list of names:

    animals = make_plural_builder(animal)
    cache = animals(cache, ["bossie", "daisy"])

The plural function is for values that need nothing special beyond
existing and being retrievable by name.
"""

from collections.abc import Callable, Hashable, Iterable
from functools import reduce
from typing import Any

from databuilder.cache import RepoCache
from databuilder.schema import create_if_needed

Builder = Callable[[RepoCache, str], RepoCache]


def make_plural_builder(singular: Builder) -> Callable[[RepoCache, Iterable[str]], RepoCache]:
    def plural(cache: RepoCache, names: Iterable[str]) -> RepoCache:
        return reduce(singular, names, cache)

    plural.__name__ = f"{getattr(singular, '__name__', 'builder')}s"
    plural.__doc__ = f"Apply {plural.__name__[:-1]}() to each of `names`."
    return plural


def ensure(
    cache: RepoCache,
    schema: Hashable,
    names: Iterable[str],
    producer_for: Callable[[str], Callable[[], Any]],
) -> RepoCache:
    """Make sure every name exists in the schema, creating missing ones."""
    for name in names:
        cache = create_if_needed(cache, schema, name, producer_for(name))
    return cache
