"""Composition root for ``lib_option_tree``.

Purpose
-------
Connect the structured file loaders with the option setter. The module exports
the stable, consumer-ready entry points for reading configuration files.

Contents
--------
* :data:`_FILE_LOADERS` – mapping of file suffixes to loader instances.
* :func:`read_file` – parse a file into a raw options tree.
* :func:`load_file` – parse a file and merge one of its sections into a store.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from .adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, YAMLFileLoader
from .application.ports import FileLoader
from .application.setter import set_options
from .domain.config import Config
from .domain.errors import FileExtension
from .observability import log_error, log_info, make_event

# Supported structured file loaders keyed by suffix.
_FILE_LOADERS: dict[str, FileLoader] = {
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
    ".toml": TOMLFileLoader(),
}


def read_file(path: str) -> Mapping[str, Any]:
    """Return the raw options tree stored in the file at *path*.

    Why
    ----
    Applications name one configuration file and let the suffix decide how it
    is parsed.

    Parameters
    ----------
    path:
        Path to a ``.json``, ``.yaml``/``.yml`` or ``.toml`` file. A blank
        path yields an empty tree.

    Raises
    ------
    FileExtension
        When the suffix is not supported.
    FileAccess, FileContent, YamlExtension
        Propagated from the loaders.

    Examples
    --------
    >>> read_file("  ")
    {}
    >>> read_file("config.ini")
    Traceback (most recent call last):
    ...
    lib_option_tree.domain.errors.FileExtension: Unsupported config file extension: config.ini
    """

    path = path.strip()
    if not path:
        return {}
    loader = _FILE_LOADERS.get(Path(path).suffix.lower())
    if loader is None:
        log_error("config_file_unsupported", **make_event("file", path))
        raise FileExtension(path)
    return loader.load(path)


def load_file(config: Config, path: str, section: str = "", name_prefix: str = "") -> Config:
    """Read the file at *path* and merge its *section* into *config*.

    What
    ----
    Delegates to :func:`read_file` and
    :func:`~lib_option_tree.application.setter.set_options`, using *section* as
    the value prefix. A missing section leaves the values of *config* in place
    and the result reports ``changed() is False``.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "config.json"
    >>> _ = target.write_text('{"jaxon": {"core": {"language": "en"}}}', encoding="utf-8")
    >>> cfg = load_file(Config(), str(target), "jaxon")
    >>> cfg.get("core.language")
    'en'
    >>> tmp.cleanup()
    """

    options = read_file(path)
    result = set_options(config, options, name_prefix, section)
    log_info("config_file_merged", **make_event("file", path, {"section": section, "changed": result.changed()}))
    return result


__all__ = ["read_file", "load_file"]
