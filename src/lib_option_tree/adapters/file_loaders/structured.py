"""Structured configuration file loaders.

Purpose
-------
Convert on-disk artifacts into raw options trees that the setter understands.
Adapters are small wrappers around ``json``/``tomllib``/``yaml.safe_load`` so
error handling and observability live in one place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`JSONFileLoader` – loader for JSON documents.
* :class:`YAMLFileLoader` – loader for YAML documents (requires PyYAML).
* :class:`TOMLFileLoader` – loader for TOML documents.

System Role
-----------
Invoked by :func:`lib_option_tree.core.read_file`, which picks the loader from
the file suffix.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from ...domain.errors import FileAccess, FileContent, YamlExtension
from ...observability import log_debug, log_error, make_event

try:
    import yaml  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    yaml = None  # type: ignore[assignment]


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    #: Format name reported in log events.
    format = "file"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`FileAccess` when it is unreadable.

        Side Effects
        ------------
        Emits ``config_file_read`` debug events.
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise FileAccess(path)
        try:
            payload = file_path.read_bytes()
        except OSError as exc:
            raise FileAccess(path) from exc
        log_debug("config_file_read", **make_event(self.format, path, {"size": len(payload)}))
        return payload

    def _invalid(self, path: str, exc: Exception) -> FileContent:
        """Log a parse failure and build the matching :class:`FileContent` error."""

        log_error("config_file_invalid", **make_event(self.format, path, {"error": str(exc)}))
        return FileContent(path, str(exc))

    def _ensure_mapping(self, data: object, *, path: str) -> Mapping[str, Any]:
        """Ensure *data* behaves like a mapping, otherwise raise :class:`FileContent`.

        Examples
        --------
        >>> BaseFileLoader()._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileLoader()._ensure_mapping([1, 2], path="demo")
        Traceback (most recent call last):
        ...
        lib_option_tree.domain.errors.FileContent: Invalid content in config file: demo (did not produce a mapping)
        """

        if not isinstance(data, Mapping):
            log_error("config_file_invalid", **make_event(self.format, path, {"error": "not a mapping"}))
            raise FileContent(path, "did not produce a mapping")
        log_debug("config_file_loaded", **make_event(self.format, path, {"keys": len(data)}))
        return data


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    format = "json"

    def load(self, path: str) -> Mapping[str, Any]:
        """Return the options tree stored in the JSON file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', suffix='.json', delete=False, encoding='utf-8')
        >>> _ = tmp.write('{"core": {"language": "en"}}')
        >>> tmp.close()
        >>> JSONFileLoader().load(tmp.name)["core"]
        {'language': 'en'}
        >>> Path(tmp.name).unlink()
        """

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents when PyYAML is available."""

    format = "yaml"

    def load(self, path: str) -> Mapping[str, Any]:
        """Return the options tree stored in the YAML file at *path*.

        Raises
        ------
        YamlExtension
            When PyYAML is not installed.
        """

        if yaml is None:
            raise YamlExtension(path)
        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            raise self._invalid(path, exc) from exc
        return self._ensure_mapping(data, path=path)


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser."""

    format = "toml"

    def load(self, path: str) -> Mapping[str, Any]:
        """Return the options tree stored in the TOML file at *path*."""

        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._ensure_mapping(data, path=path)
