"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the option setter, the file readers,
and consuming applications. The hierarchy lives in the domain layer so outer
layers may depend on it without creating import cycles.

Contents
--------
* :class:`ConfigError` – umbrella base class for all configuration issues.
* :class:`DataError` / :class:`DataDepth` – problems found in option data.
* :class:`FileError` and subclasses – problems reading configuration files.

System Role
-----------
:class:`DataDepth` aborts a merge as a whole. File errors are raised by the
structured loaders and propagate uncaught to the application boundary. Callers
catch :class:`ConfigError` to handle all library failures uniformly.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_option_tree``."""


class DataError(ConfigError):
    """Raised when option data cannot be stored as configuration.

    Why
    ----
    Separate malformed option trees from file-level failures so callers can
    report them differently.
    """


class DataDepth(DataError):
    """Raised when an options tree nests deeper than the setter allows.

    Attributes
    ----------
    prefix:
        Dotted name prefix reached when the limit was hit.
    depth:
        Recursion depth at which the merge was aborted.

    Examples
    --------
    >>> str(DataDepth("core.one.", 10))
    'The depth of options under "core.one." exceeds the limit (depth 10)'
    """

    def __init__(self, prefix: str, depth: int) -> None:
        super().__init__(f'The depth of options under "{prefix}" exceeds the limit (depth {depth})')
        self.prefix = prefix
        self.depth = depth


class FileError(ConfigError):
    """Base type for failures while reading a configuration file.

    Attributes
    ----------
    path:
        Path of the offending file as given by the caller.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class FileAccess(FileError):
    """Raised when a configuration file is missing or cannot be read."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Unable to read config file: {path}", path)


class FileContent(FileError):
    """Raised when a configuration file does not parse into a mapping.

    Typical Sources
    ---------------
    Structured file loaders (:mod:`json`, :mod:`tomllib`, :mod:`yaml`).
    """

    def __init__(self, path: str, reason: str | None = None) -> None:
        message = f"Invalid content in config file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, path)
        self.reason = reason


class FileExtension(FileError):
    """Raised when the file suffix matches none of the supported formats."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Unsupported config file extension: {path}", path)


class YamlExtension(FileError):
    """Raised when a YAML file is requested but PyYAML is not installed."""

    def __init__(self, path: str) -> None:
        super().__init__(f"PyYAML is required to read YAML config file: {path}", path)
