"""Exceptions raised by the builder helpers."""


class BuilderError(Exception):
    """Base class for every error raised by databuilder."""


class UnknownOption(BuilderError, ValueError):
    """Raised when caller-supplied options contain unrecognized keys."""

    def __init__(self, keys: list):
        self.keys = list(keys)
        super().__init__(f"Unrecognized option(s): {self.keys!r}")


class MissingEntry(BuilderError, LookupError):
    """Raised when a specific name is required but absent from its schema."""

    def __init__(self, schema, name):
        self.schema = schema
        self.name = name
        super().__init__(f"There is no {name!r} in schema {schema!r}")


class InvalidSelection(BuilderError, ValueError):
    """Raised when selection keywords don't form one of the accepted shapes."""


class UnknownSchema(BuilderError, LookupError):
    """Raised when a store adapter has no table for a schema."""

    def __init__(self, schema):
        self.schema = schema
        super().__init__(f"No table is configured for schema {schema!r}")


class ReservedAlias(BuilderError, ValueError):
    """Raised when an entry's alias would be hidden by a RepoCache attribute."""

    def __init__(self, schema, name, alias):
        self.schema = schema
        self.name = name
        self.alias = alias
        super().__init__(
            f"{name!r} in schema {schema!r} can't be given shorthand: "
            f"{alias!r} is a RepoCache attribute"
        )


class MissingRow(BuilderError, LookupError):
    """Raised when a store loader can't find the row a cached value refers to."""

    def __init__(self, schema, table, key, key_value):
        self.schema = schema
        self.table = table
        self.key = key
        self.key_value = key_value
        super().__init__(
            f"No row in table {table!r} with {key} = {key_value!r} (schema {schema!r})"
        )
