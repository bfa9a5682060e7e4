"""Application-layer ports describing adapter responsibilities.

Contents
--------
* :class:`FileLoader` – parses a structured configuration artifact.

System Role
-----------
The composition root dispatches to loaders through this protocol, so new
formats can be registered without touching the setter.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class FileLoader(Protocol):
    """Parse a structured configuration file into a raw options tree."""

    def load(self, path: str) -> Mapping[str, Any]:
        """Read *path* and return a mapping, or raise a ``FileError`` subclass."""
