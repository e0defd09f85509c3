"""
Store adapters

Producers and loaders backed by a PostgreSQL database, for builders
that keep their fixtures in real tables:

    def animal(cache, name, **opts):
        return create_if_needed(
            cache, "animal", name,
            inserter("animals", name=name, species_id=cache.bovine["id"], **opts),
        )

    loader = TableLoader(
        {"animal": "animals", "procedure": "procedures"},
        associations={"animal": {"service_gaps": ("service_gaps", "animal_id")}},
    )
    cache = load_fully(cache, loader, schema="animal")
"""

import logging
from collections.abc import Callable, Hashable, Mapping

from psycopg import sql

from databuilder import db
from databuilder.errors import MissingRow, UnknownSchema

logger = logging.getLogger(__name__)


def insert_row(table: str, **values) -> dict:
    """Insert one row and return it, including generated columns."""
    columns = list(values)
    query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *").format(
        table=sql.Identifier(table),
        columns=sql.SQL(", ").join(map(sql.Identifier, columns)),
        placeholders=sql.SQL(", ").join([sql.Placeholder()] * len(columns)),
    )
    row = db.fetch_one(query, tuple(values[c] for c in columns))
    logger.debug("Inserted into %s: %r", table, row)
    return row


def inserter(table: str, **values) -> Callable[[], dict]:
    """Return a producer that inserts the row only when called."""

    def produce() -> dict:
        return insert_row(table, **values)

    return produce


class TableLoader:
    """
    Loader that re-fetches cached rows and their child rows.

    Args:
        tables: schema name -> table name
        key: column identifying a row, read from the cached value
        associations: schema name -> {field: (child_table, foreign_key)};
            each field is filled with the child rows referencing the row
    """

    def __init__(
        self,
        tables: Mapping[Hashable, str],
        key: str = "id",
        associations: Mapping[Hashable, Mapping[str, tuple[str, str]]] | None = None,
    ):
        self.tables = dict(tables)
        self.key = key
        self.associations = {s: dict(a) for s, a in (associations or {}).items()}

    def __call__(self, schema: Hashable, value: Mapping) -> dict:
        table = self.tables.get(schema)
        if table is None:
            raise UnknownSchema(schema)

        key_value = value[self.key]
        row = db.fetch_one(
            sql.SQL("SELECT * FROM {table} WHERE {key} = %s").format(
                table=sql.Identifier(table),
                key=sql.Identifier(self.key),
            ),
            (key_value,),
        )
        if row is None:
            raise MissingRow(schema, table, self.key, key_value)

        associations = self.associations.get(schema, {})
        for field, (child_table, foreign_key) in associations.items():
            row[field] = db.fetch_all(
                sql.SQL("SELECT * FROM {table} WHERE {fk} = %s ORDER BY {key}").format(
                    table=sql.Identifier(child_table),
                    fk=sql.Identifier(foreign_key),
                    key=sql.Identifier(self.key),
                ),
                (key_value,),
            )

        logger.debug("Loaded %s %r with %d association(s)", table, key_value, len(associations))
        return row
