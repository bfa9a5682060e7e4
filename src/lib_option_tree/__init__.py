"""Public package surface for ``lib_option_tree``.

The package stores configuration options in an immutable :class:`Config`
keyed by dotted names (``core.prefix.function``) and builds new stores with the
pure setter functions. File readers for JSON, YAML and TOML feed raw option
trees into the setter.
"""

from __future__ import annotations

from .application.setter import MAX_DEPTH, new_config, set_option, set_options
from .core import load_file, read_file
from .domain.config import EMPTY_CONFIG, Config
from .domain.errors import (
    ConfigError,
    DataDepth,
    DataError,
    FileAccess,
    FileContent,
    FileError,
    FileExtension,
    YamlExtension,
)
from .domain.names import contains_options, explode_name
from .observability import bind_trace_id, get_logger

__all__ = [
    "Config",
    "EMPTY_CONFIG",
    "MAX_DEPTH",
    "new_config",
    "set_option",
    "set_options",
    "read_file",
    "load_file",
    "contains_options",
    "explode_name",
    "ConfigError",
    "DataError",
    "DataDepth",
    "FileError",
    "FileAccess",
    "FileContent",
    "FileExtension",
    "YamlExtension",
    "bind_trace_id",
    "get_logger",
]
