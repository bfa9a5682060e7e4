"""Helpers for dotted option names and option values.

Contents
--------
* :func:`explode_name` – split a dotted name into trimmed, non-empty segments.
* :func:`normalize_prefix` – strip surrounding whitespace and dots.
* :func:`contains_options` – decide whether a value is a sub-tree of options or
  a terminal value.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

# Keys that would be integer indexes in a list-like array, e.g. "0" or "-3".
_INDEX_KEY = re.compile(r"-?(0|[1-9][0-9]*)")


def explode_name(name: str) -> list[str]:
    """Return the non-empty, trimmed segments of the dotted *name*.

    Examples
    --------
    >>> explode_name(" core . prefix..function ")
    ['core', 'prefix', 'function']
    >>> explode_name("")
    []
    """

    return [segment for segment in (part.strip() for part in name.split(".")) if segment]


def normalize_prefix(prefix: str) -> str:
    """Trim whitespace and dots around *prefix*.

    >>> normalize_prefix(" jaxon.core. ")
    'jaxon.core'
    """

    return prefix.strip(" .")


def contains_options(value: object) -> bool:
    """Return ``True`` when *value* is a non-empty mapping of option names.

    Why
    ----
    A list stored under an option (``core.array = [1, 2, 3]``) is one opaque
    value; only mappings keyed by real option names are expanded into
    nested options.

    Examples
    --------
    >>> contains_options({"language": "en"})
    True
    >>> contains_options({})
    False
    >>> contains_options([1, 2, 3])
    False
    >>> contains_options({0: "a", 1: "b"})
    False
    >>> contains_options({"0": "a"})
    False
    """

    if not isinstance(value, Mapping) or not value:
        return False
    return all(isinstance(key, str) and not _INDEX_KEY.fullmatch(key) for key in value)
