"""Terminal output helpers."""

from __future__ import annotations


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a run (read, build, sort, write) in
    terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def detail(msg: str) -> None:
    """Print an indented line under the current step."""
    print(f"  {msg}")
