"""Exceptions raised by depsort.

Library code raises these; the CLI turns them into an error message and a
non-zero exit status.
"""

from __future__ import annotations


class DepsortError(Exception):
    """Base class for all fatal depsort errors."""


class InputMissingError(DepsortError):
    """The dependency file could not be opened."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f'unable to open "{path}" for input: {reason}')


class MalformedRecordError(DepsortError):
    """A dependency line does not name an owner and at least one dependency."""

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        super().__init__(f"line {line_no}: {reason}: {line!r}")


class UnknownTargetError(DepsortError):
    """A requested unit name was never seen in the dependency file."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unable to find key for file with name {name}")


class CycleError(DepsortError):
    """The dependency graph contains a cycle."""

    def __init__(self, units: list[str]) -> None:
        self.units = units
        super().__init__(f"Dependency cycle detected involving: {', '.join(units)}")


class ConfigError(DepsortError):
    """The [tool.depsort] settings are invalid."""


class OutputError(DepsortError):
    """An output file could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f'unable to write "{path}": {reason}')
