"""Settings for depsort.

Defaults match the conventional file names (`depend` in, `file_list.txt`
and `depend.dot` out). They can be overridden in the [tool.depsort] table
of pyproject.toml, and command-line options override both:

    [tool.depsort]
    input = "build/depend"
    output = "build/file_list.txt"
    dot-mode = "neighbors"
    nodes = ["solver", "mesh"]

Uses tomlkit to read the file, matching how the rest of the toolchain
reads pyproject.toml.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from tomlkit.exceptions import ParseError

from .errors import ConfigError

DotMode = Literal["closure", "neighbors"]


class Settings(BaseModel):
    """Resolved settings for one run.

    Attributes:
        input: Dependency file to read.
        output: Where the build order is written.
        dot: Where the GraphViz rendering is written.
        dot_mode: "closure" renders everything the target depends on;
                  "neighbors" renders direct parent and child edges of
                  `nodes` (or of the target when nodes is empty).
        nodes: Units rendered in "neighbors" mode.
        delimiter: Suffix delimiter; everything from its first occurrence
                   is stripped from unit names.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    input: Path = Path("depend")
    output: Path = Path("file_list.txt")
    dot: Path = Path("depend.dot")
    dot_mode: DotMode = Field(default="closure", alias="dot-mode")
    nodes: list[str] = Field(default_factory=list)
    delimiter: str = Field(default=".", min_length=1)

    def merged(self, **overrides: Any) -> Settings:
        """Return a copy with every non-None override applied."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return Settings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(_describe(exc)) from exc


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file."""
    return tomlkit.parse(path.read_text())


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from [tool.depsort] in pyproject.toml.

    Args:
        path: pyproject.toml to read. Defaults to the one in the current
              directory; a missing default file yields the defaults.

    Raises:
        ConfigError: If an explicit path is missing, the file is not valid
            TOML, or the table has unknown keys or invalid values.
    """
    explicit = path is not None
    path = path if explicit else Path.cwd() / "pyproject.toml"
    if not path.exists():
        if explicit:
            raise ConfigError(f"config file not found: {path}")
        return Settings()

    try:
        doc = load_pyproject(path)
    except (OSError, ParseError) as exc:
        raise ConfigError(f"{path}: {exc}") from exc

    tool = doc.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigError(f"{path}: [tool] must be a table")
    table = tool.get("depsort", {})
    if not isinstance(table, dict):
        raise ConfigError(f"{path}: [tool.depsort] must be a table")
    try:
        return Settings.model_validate(table.unwrap() if table else {})
    except ValidationError as exc:
        raise ConfigError(f"{path} [tool.depsort]: {_describe(exc)}") from exc


def _describe(exc: ValidationError) -> str:
    """Flatten pydantic errors into one line per field."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
        for err in exc.errors()
    )
