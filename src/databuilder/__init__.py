"""
databuilder

Support code for test data builders that (1) create persistent state,
typically rows in a database, and (2) produce a value describing that
state in a form that's convenient for tests.

That value is called the "repo cache" and is conventionally bound to
`cache` in test code. Its main part looks like this:

    cache.schemas == {
        "animal": {"bossie": {"id": 1, "name": "bossie", ...},
                   "daisy": {"id": 2, "name": "daisy", ...}},
        "procedure": {...},
    }

Entries can be read with schema.get(), but shorthand is usually better:

    cache = repo.shorthand(cache, schema="animal")
    cache.bossie["id"]

Values in the cache are typically "fully loaded" with repo.load_fully(),
which usually means their associations are populated. What that means
is decided schema by schema by the builder that uses this package.
"""

from databuilder import repo, schema
from databuilder.builders import ensure, make_plural_builder
from databuilder.cache import RepoCache, alias_for
from databuilder.errors import (
    BuilderError,
    InvalidSelection,
    MissingEntry,
    MissingRow,
    ReservedAlias,
    UnknownOption,
    UnknownSchema,
)
from databuilder.options import combine_opts
from databuilder.repo import Selection, load_fully, shorthand
from databuilder.schema import create_if_needed, get, names, put, replace

__all__ = [
    "repo",
    "schema",
    # Cache value
    "RepoCache",
    "alias_for",
    # Schema accessor
    "put",
    "replace",
    "get",
    "create_if_needed",
    "names",
    # Materializer
    "Selection",
    "shorthand",
    "load_fully",
    # Helpers
    "combine_opts",
    "make_plural_builder",
    "ensure",
    # Errors
    "BuilderError",
    "UnknownOption",
    "MissingEntry",
    "MissingRow",
    "ReservedAlias",
    "InvalidSelection",
    "UnknownSchema",
]
