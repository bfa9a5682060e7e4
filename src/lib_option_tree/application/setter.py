"""Application-layer option setter.

Purpose
-------
Write raw option trees into immutable :class:`~lib_option_tree.domain.config.Config`
stores. Every function is pure: it takes a store and returns a new one, leaving
the input untouched.

Contents
    - ``new_config``: build a store from a raw options tree.
    - ``set_option``: store a single value and back-fill its parents.
    - ``set_options``: merge a whole options tree, optionally narrowed to a
      section and renamed under a prefix.
    - ``_set_value`` / ``_set_values``: the recursive stanzas doing the work on
      plain dictionaries.

System Role
-----------
Receives option trees from callers or from :func:`lib_option_tree.core.load_file`
and produces the stores consumed by the rest of the application.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from ..domain.config import Config, EMPTY_CONFIG, _deepcopy_mapping, _deepcopy_value
from ..domain.errors import DataDepth
from ..domain.names import contains_options, explode_name, normalize_prefix
from ..observability import log_debug, log_error

#: Deepest recursion level accepted by :func:`set_options`, counted from 0 at
#: the root of the options tree.
MAX_DEPTH: Final[int] = 9


def new_config(
    options: Mapping[str, Any] | None = None,
    name_prefix: str = "",
    value_prefix: str = "",
) -> Config:
    """Create a new store from the raw *options* tree.

    Examples
    --------
    >>> cfg = new_config({"core": {"language": "en"}})
    >>> cfg.get("core.language")
    'en'
    >>> cfg.get("core") == {"language": "en"}
    True
    >>> new_config().values()
    mappingproxy({})
    """

    if not options:
        return EMPTY_CONFIG
    return set_options(EMPTY_CONFIG, options, name_prefix, value_prefix)


def set_option(config: Config, name: str, value: Any) -> Config:
    """Return a copy of *config* with *value* stored under the dotted *name*.

    Why
    ----
    Reading a parent option must reflect the new leaf without rebuilding the
    whole store.

    What
    ----
    Stores a copy of *value* under *name*, then merges the leaf into the
    sub-mapping of every parent. A parent holding a terminal value is replaced
    by a new mapping.

    Examples
    --------
    >>> cfg = set_option(Config(), "core.prefix.function", "jaxon_")
    >>> cfg.get("core") == {"prefix": {"function": "jaxon_"}}
    True
    >>> cfg.get("core.prefix.function")
    'jaxon_'
    """

    return Config(_set_value(dict(config.values()), name, _deepcopy_value(value)))


def set_options(
    config: Config,
    options: Mapping[str, Any],
    name_prefix: str = "",
    value_prefix: str = "",
) -> Config:
    """Merge the raw *options* tree into *config*.

    Why
    ----
    Configuration files usually carry one section per component; callers load
    the part they own and file it under their own namespace.

    What
    ----
    Narrows *options* to the section named by *value_prefix*, then stores each
    terminal value under *name_prefix* plus its dotted path in the tree.

    Parameters
    ----------
    config:
        Store receiving the options.
    options:
        Raw options tree, typically the output of a file loader.
    name_prefix:
        Dotted prefix prepended to every stored option name.
    value_prefix:
        Dotted path of the section of *options* to merge.

    Returns
    -------
    Config
        New store. When a segment of *value_prefix* is missing or does not hold
        a mapping, the values of *config* are returned unchanged and
        :meth:`Config.changed` reports ``False``.

    Raises
    ------
    DataDepth
        When the tree nests deeper than :data:`MAX_DEPTH`. Nothing is merged.

    Examples
    --------
    >>> raw = {"jaxon": {"core": {"language": "en"}}}
    >>> set_options(Config(), raw, "lib", "jaxon").get("lib.core.language")
    'en'
    >>> set_options(Config(), raw, "", "jaxon.missing").changed()
    False
    """

    section: Any = options
    for key in explode_name(normalize_prefix(value_prefix)):
        if not isinstance(section, Mapping) or not isinstance(section.get(key), Mapping):
            log_debug("options_section_missing", section=value_prefix, key=key)
            return Config(config.values(), False)
        section = section[key]

    prefix = normalize_prefix(name_prefix)
    if prefix:
        prefix += "."
    values = _set_values(dict(config.values()), _deepcopy_mapping(section), prefix, 0)
    log_debug("options_merged", prefix=prefix, section=value_prefix, total=len(values))
    return Config(values)


def _set_value(values: dict[str, Any], name: str, value: Any) -> dict[str, Any]:
    """Store *value* under *name* in *values* and back-fill the parents of *name*."""

    segments = explode_name(name)
    child = value
    while len(segments) > 1:
        leaf = segments.pop()
        parent = ".".join(segments)
        current = values.get(parent)
        merged = dict(current) if contains_options(current) else {}
        merged[leaf] = child
        values[parent] = merged
        child = merged
    values[name] = value
    return values


def _set_values(values: dict[str, Any], options: Mapping[str, Any], prefix: str, depth: int) -> dict[str, Any]:
    """Recursively store the terminal values of *options* under *prefix*."""

    if depth > MAX_DEPTH:
        log_error("options_depth_exceeded", prefix=prefix, depth=depth)
        raise DataDepth(prefix, depth)

    for key, value in options.items():
        name = str(key).strip()
        if contains_options(value):
            values = _set_values(values, value, f"{prefix}{name}.", depth + 1)
            continue
        values = _set_value(values, prefix + name, value)
    return values


__all__ = ["MAX_DEPTH", "new_config", "set_option", "set_options"]
