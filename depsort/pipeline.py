"""Build-order pipeline: read → build graph → order → write.

This module orchestrates a depsort run:
1. Read the dependency file into records
2. Intern every unit name and build the full dependency graph
3. Sort either the full graph, or the closure of a requested target
4. Work out which edges to render to the dot file, if any
5. Write the build order and the dot file

Everything that can fail (missing input, malformed lines, unknown names,
cycles) is checked in steps 1-4, and step 5 replaces the outputs together
only once all of them were written, so nothing is changed unless the whole
run succeeds.
"""

from __future__ import annotations

from .config import Settings
from .errors import UnknownTargetError
from .export import format_build_order, render_dot, write_outputs
from .graph import (
    DenseGraph,
    Edge,
    build_graph,
    neighbor_edges,
    reduce_to_closure,
    topo_sort,
)
from .models import BuildResult
from .names import NameInterner
from .parse import read_records
from .shell import detail, step


def resolve(name: str, interner: NameInterner) -> int:
    """Find the key for a user-supplied unit name (suffix optional).

    Raises:
        UnknownTargetError: If the name never appeared in the input.
    """
    key = interner.find(name)
    if key is None:
        raise UnknownTargetError(interner.strip(name))
    return key


def load_graph(settings: Settings) -> tuple[NameInterner, DenseGraph]:
    """Read the dependency file and build the full program graph."""
    step(f"Reading input file for dependencies ({settings.input})")
    records = read_records(settings.input, settings.delimiter)
    detail(f"{len(records)} dependency records")

    step("Generating dependency graph")
    interner = NameInterner(settings.delimiter)
    graph = build_graph(records, interner)
    detail(f"{len(interner)} units")
    return interner, graph


def dot_edges_for(
    settings: Settings,
    interner: NameInterner,
    graph: DenseGraph,
    target: int | None,
    closure: frozenset[Edge] | None,
) -> frozenset[Edge] | None:
    """Pick the edges to render according to the dot mode.

    "closure" renders the target's closure and needs a target. "neighbors"
    renders direct edges of the configured nodes, falling back to the target.
    Returns None when there is nothing to render.
    """
    if settings.dot_mode == "closure":
        return closure

    keys = [resolve(name, interner) for name in settings.nodes]
    if not keys and target is not None:
        keys = [target]
    if not keys:
        return None
    return neighbor_edges(keys, graph)


def run(settings: Settings, target: str | None = None) -> BuildResult:
    """Run the full pipeline and write the output files.

    Args:
        settings: Resolved file paths and dot options.
        target: Unit to restrict the build order to. None orders the whole
                program.

    Returns:
        The build order and the rendered edges.

    Raises:
        DepsortError: On any fatal error. No output file is written then.
    """
    interner, graph = load_graph(settings)
    name_of = interner.name_of

    target_key: int | None = None
    closure: frozenset[Edge] | None = None
    if target is not None:
        target_key = resolve(target, interner)
        step(f"Generating dependency list for {name_of(target_key)}")
        subgraph, closure = reduce_to_closure(target_key, graph, name_of)
        order = topo_sort(subgraph, name_of)
    else:
        step("Generating full dependency list")
        order = topo_sort(graph, name_of)

    edges = dot_edges_for(settings, interner, graph, target_key, closure)
    result = BuildResult(
        order=[name_of(k) for k in order],
        target=None if target_key is None else name_of(target_key),
        dot_edges=(
            None
            if edges is None
            else [(name_of(src), name_of(dst)) for src, dst in sorted(edges)]
        ),
    )

    step("Writing output")
    outputs = {settings.output: format_build_order(result.order)}
    if result.dot_edges is not None:
        outputs[settings.dot] = render_dot(result.dot_edges)
    write_outputs(outputs)
    detail(f"{settings.output}: {len(result.order)} units")
    if result.dot_edges is not None:
        detail(f"{settings.dot}: {len(result.dot_edges)} edges ({settings.dot_mode})")

    return result
