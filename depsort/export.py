"""Output writers.

Renders edges as GraphViz text and writes the output files. Every file is
first written to a temporary path next to its destination; the temporaries
are renamed into place only once all of them were written, so a failed run
never leaves a half-written or mismatched set of outputs behind.
"""

from __future__ import annotations

import errno
import os
import stat
from collections.abc import Iterable, Mapping
from pathlib import Path
from tempfile import NamedTemporaryFile

from .errors import OutputError


def render_dot(edges: Iterable[tuple[str, str]]) -> str:
    """Render (from, to) name pairs as a GraphViz digraph.

    Edges are emitted in the order given.

    Example:
        render_dot([("base", "solver")]) →
            Digraph G {
              base -> solver
            }
    """
    lines = ["Digraph G {"]
    lines.extend(f"  {src} -> {dst}" for src, dst in edges)
    lines.append("}")
    return "\n".join(lines) + "\n"


def format_build_order(names: Iterable[str]) -> str:
    """Unit names on a single line, separated by spaces."""
    return " ".join(names)


def _file_mode(path: Path) -> int:
    """Mode for a new file at path: the existing file's, else 0o666 less the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _stage(path: Path, text: str) -> Path:
    """Write text to a temporary file beside path and return its location."""
    if path.is_dir():
        raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), str(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _file_mode(path)
    tmp = NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(text)
        os.chmod(temp_path, mode)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    return temp_path


def write_outputs(outputs: Mapping[Path, str]) -> None:
    """Write every path → text pair, replacing destinations only if all writes succeed.

    Raises:
        OutputError: If a file cannot be written or renamed into place.
    """
    staged: list[tuple[Path, Path]] = []
    current: Path | None = None
    try:
        for current, text in outputs.items():
            staged.append((_stage(current, text), current))
        for temp_path, current in staged:
            os.replace(temp_path, current)
    except OSError as exc:
        raise OutputError(str(current), exc.strerror or str(exc)) from exc
    finally:
        for temp_path, _ in staged:
            temp_path.unlink(missing_ok=True)


def write_text_atomic(path: Path, text: str) -> None:
    """Write text to path, replacing it only once the write has succeeded."""
    write_outputs({path: text})
