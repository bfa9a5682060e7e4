"""Domain-level configuration value object.

Purpose
-------
Anchor the immutable :class:`Config` store that carries option values through
the system. This module belongs to the domain layer and contains no I/O.

Contents
--------
* :class:`Config` – flat, read-only store keyed by dotted option names.
* :func:`_freeze_mapping` – recursive ``mappingproxy`` wrapping applied to
  every store, so sub-mappings shared between successive stores stay read-only.
* :func:`_deepcopy_mapping` / :func:`_deepcopy_value` – internal helpers that
  clone nested mappings without relying on ``copy.deepcopy`` (which does not
  handle ``mappingproxy`` objects).
* :data:`EMPTY_CONFIG` – canonical empty instance.

System Role
-----------
Every writer in :mod:`lib_option_tree.application.setter` returns a new
:class:`Config`. Each option ``a.b.c`` is stored under its full dotted name, and
the parents ``a`` and ``a.b`` hold aggregated sub-mappings, so both single
values and whole sections are one lookup away.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar, overload

from .names import contains_options, normalize_prefix

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable store of option values keyed by dotted names.

    Why
    ----
    Callers share one configuration between components and must not be able to
    alter it behind each other's back. Updates go through the setter functions,
    which always build a new instance.

    Parameters
    ----------
    _values:
        Flat mapping from dotted names to values. It is wrapped in a
        ``mappingproxy`` during initialisation to enforce immutability.
    _changed:
        ``False`` when the setter call that produced this instance was a no-op.

    Examples
    --------
    >>> cfg = Config({"core": {"language": "en"}, "core.language": "en"})
    >>> cfg.get("core.language")
    'en'
    >>> cfg.option_names("core")
    {'language': 'core.language'}
    >>> cfg.changed()
    True
    """

    _values: Mapping[str, Any] = field(default_factory=dict)
    _changed: bool = True

    def __post_init__(self) -> None:
        """Wrap the incoming mapping, and every mapping nested in it, in ``MappingProxyType``.

        Side Effects
        ------------
        Mutates the dataclass field via ``object.__setattr__`` during
        initialisation only.
        """

        object.__setattr__(self, "_values", _freeze_mapping(self._values))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    @overload
    def get(self, name: str, default: T) -> T: ...

    @overload
    def get(self, name: str, default: None = ...) -> Any | None: ...

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value stored under the dotted *name*, or *default*.

        Examples
        --------
        >>> cfg = Config({"core.debug.on": False})
        >>> cfg.get("core.debug.on")
        False
        >>> cfg.get("core.debug.off", "fallback")
        'fallback'
        """

        return self._values.get(name, default)

    def has(self, name: str) -> bool:
        """Return ``True`` when an option is stored under exactly *name*."""

        return name in self._values

    def option_names(self, prefix: str) -> dict[str, str]:
        """Return the options one level below *prefix*.

        Why
        ----
        Plugins iterate the options of their own section without knowing the
        names in advance.

        What
        ----
        Maps each short name to its fully qualified dotted name. A blank
        *prefix* names no section and yields nothing. Terminal values
        (including lists) have no children.

        Examples
        --------
        >>> cfg = Config({
        ...     "jaxon.core": {"language": "en", "prefix": {"class": "Jx"}},
        ...     "jaxon.core.language": "en",
        ...     "jaxon.core.prefix": {"class": "Jx"},
        ...     "jaxon.core.prefix.class": "Jx",
        ... })
        >>> cfg.option_names(" jaxon.core. ")
        {'language': 'jaxon.core.language', 'prefix': 'jaxon.core.prefix'}
        >>> cfg.option_names("jaxon.core.language")
        {}
        """

        prefix = normalize_prefix(prefix)
        section = self._values.get(prefix) if prefix else None
        if not contains_options(section):
            return {}
        return {name: f"{prefix}.{name}" for name in section}

    def values(self) -> Mapping[str, Any]:
        """Return the read-only flat store."""

        return self._values

    def changed(self) -> bool:
        """Return ``False`` when the setter call producing this store was a no-op."""

        return self._changed

    def as_dict(self) -> dict[str, Any]:
        """Construct a deep (mutable) ``dict`` copy of the flat store.

        Examples
        --------
        >>> cfg = Config({"core.array": [1, 2]})
        >>> clone = cfg.as_dict()
        >>> clone["core.array"].append(3)
        >>> cfg.get("core.array")
        [1, 2]
        """

        return _deepcopy_mapping(self._values)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the flat store to JSON.

        Examples
        --------
        >>> Config({"core.language": "en"}).to_json()
        '{"core.language":"en"}'
        """

        import json

        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False)


def _freeze_mapping(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return a read-only proxy around a copy of *mapping* with nested mappings frozen too.

    Successive stores share their parent sub-mappings, so none of them may be
    writable.

    >>> frozen = _freeze_mapping({"core": {"language": "en"}})
    >>> frozen["core"]["language"] = "fr"
    Traceback (most recent call last):
    ...
    TypeError: 'mappingproxy' object does not support item assignment
    """

    return MappingProxyType({key: _freeze_value(value) for key, value in mapping.items()})


def _freeze_value(value: Any) -> Any:
    """Freeze *value* when it is a mapping; other values are returned as is."""

    if isinstance(value, MappingProxyType):
        return value
    if isinstance(value, Mapping):
        return _freeze_mapping(value)
    return value


def _deepcopy_mapping(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively clone a mapping so callers receive a mutable copy.

    >>> _deepcopy_mapping({"a": {"b": 1}})["a"]["b"]
    1
    """

    return {key: _deepcopy_value(value) for key, value in mapping.items()}


def _deepcopy_value(value: Any) -> Any:
    """Clone nested values while preserving container types where practical.

    >>> _deepcopy_value(("a", "b"))
    ('a', 'b')
    """

    if isinstance(value, Mapping):
        return _deepcopy_mapping(value)
    if isinstance(value, list):
        return [_deepcopy_value(item) for item in value]
    if isinstance(value, (set, tuple)):
        return type(value)(_deepcopy_value(item) for item in value)
    return value


#: Shared empty store. The instance is safe to re-use because :class:`Config`
#: enforces immutability.
EMPTY_CONFIG = Config()
