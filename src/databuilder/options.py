from collections.abc import Iterable, Mapping
from typing import Any

from databuilder.errors import UnknownOption


def _as_dict(opts: Mapping | Iterable | None) -> dict[str, Any]:
    # dict() accepts both mappings and sequences of pairs
    return dict(opts) if opts is not None else {}


def combine_opts(given: Mapping | Iterable | None, defaults: Mapping | Iterable) -> dict:
    """
    Override `defaults` with `given`, rejecting keys `defaults` doesn't know.

    Either argument may be a mapping or a list of (key, value) pairs.

        combine_opts({"a": 5}, {"a": 1, "b": 2})   # {"a": 5, "b": 2}
        combine_opts([("c", 1)], {"a": 1})         # raises UnknownOption(["c"])

    Returns:
        A new plain dict
    """
    given = _as_dict(given)
    defaults = _as_dict(defaults)

    extras = [key for key in given if key not in defaults]
    if extras:
        raise UnknownOption(extras)

    return {**defaults, **given}
