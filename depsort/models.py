"""Data models for depsort.

These Pydantic models represent the records read from the dependency file
and the result handed back by the pipeline.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DependencyRecord(BaseModel):
    """One line of the dependency file.

    Attributes:
        line_no: 1-based line number in the input file.
        owner: The unit this line describes, as written (suffix not stripped).
        deps: Direct dependencies of owner, in the order they were listed.
              At least one is required; a line naming only an owner is
              malformed.
    """

    line_no: int
    owner: str
    deps: list[str] = Field(min_length=1)


class BuildResult(BaseModel):
    """Outcome of a depsort run.

    Attributes:
        order: Unit names in build order (dependencies first).
        target: The unit the order was restricted to, or None for the full
                program.
        dot_edges: (from, to) name pairs rendered to the dot file, or None
                   when no dot file was requested.
    """

    order: list[str]
    target: str | None = None
    dot_edges: list[tuple[str, str]] | None = None
