"""Dependency graph utilities.

Builds the "depends-on" DAG from dependency records, extracts the closure
of a single unit, and topologically sorts a graph to get a build order.
When unit A depends on unit B, B is built first.

Graphs are stored as two adjacency tables that are exact inverses:

- parents_of(k): units k depends on (must be built before k)
- children_of(k): units that depend on k

An edge is a (parent, child) pair of keys: child depends on parent.
"""

from __future__ import annotations

import heapq
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

from .errors import CycleError
from .models import DependencyRecord
from .names import NameInterner

Edge = tuple[int, int]


class Adjacency(Protocol):
    """What the sorter needs from a graph representation."""

    def nodes(self) -> Iterable[int]: ...

    def parents_of(self, key: int) -> list[int]: ...

    def children_of(self, key: int) -> list[int]: ...

    def copy(self) -> Adjacency: ...


@dataclass
class DenseGraph:
    """Graph over every key in [0, N), stored in lists indexed by key."""

    parents: list[list[int]] = field(default_factory=list)
    children: list[list[int]] = field(default_factory=list)

    @classmethod
    def with_size(cls, size: int) -> DenseGraph:
        return cls(
            parents=[[] for _ in range(size)],
            children=[[] for _ in range(size)],
        )

    def nodes(self) -> range:
        return range(len(self.parents))

    def parents_of(self, key: int) -> list[int]:
        return self.parents[key]

    def children_of(self, key: int) -> list[int]:
        return self.children[key]

    def add_edge(self, parent: int, child: int) -> None:
        self.parents[child].append(parent)
        self.children[parent].append(child)

    def copy(self) -> DenseGraph:
        return DenseGraph(
            parents=[list(p) for p in self.parents],
            children=[list(c) for c in self.children],
        )

    def __len__(self) -> int:
        return len(self.parents)


@dataclass
class SparseGraph:
    """Graph over an arbitrary subset of keys, stored in dicts.

    Used for reduced subgraphs, where only the units a target depends on
    need to be stored and indexed.
    """

    parents: dict[int, list[int]] = field(default_factory=dict)
    children: dict[int, list[int]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, nodes: Iterable[int], edges: Iterable[Edge]) -> SparseGraph:
        """Build a graph over nodes; every node gets an entry, even without edges."""
        graph = cls()
        for node in sorted(nodes):
            graph.parents[node] = []
            graph.children[node] = []
        for parent, child in edges:
            graph.children[parent].append(child)
            graph.parents[child].append(parent)
        return graph

    def nodes(self) -> Iterable[int]:
        return self.parents.keys()

    def parents_of(self, key: int) -> list[int]:
        return self.parents[key]

    def children_of(self, key: int) -> list[int]:
        return self.children[key]

    def copy(self) -> SparseGraph:
        return SparseGraph(
            parents={k: list(v) for k, v in self.parents.items()},
            children={k: list(v) for k, v in self.children.items()},
        )

    def __len__(self) -> int:
        return len(self.parents)


def build_graph(records: Iterable[DependencyRecord], interner: NameInterner) -> DenseGraph:
    """Build the full program graph from parsed records.

    Two passes: the first interns every name so the key space is complete
    before the tables are sized, the second records the edges. Repeated
    (owner, dep) pairs are kept as repeated entries; the sorter handles
    them consistently.
    """
    records = list(records)
    # First pass: establish every key
    for record in records:
        interner.get_or_create(record.owner)
        for dep in record.deps:
            interner.get_or_create(dep)

    # Second pass: fill in the edges
    graph = DenseGraph.with_size(len(interner))
    for record in records:
        owner = interner.get_or_create(record.owner)
        for dep in record.deps:
            graph.add_edge(interner.get_or_create(dep), owner)
    return graph


def collect_deps(
    target: int, graph: Adjacency, label: Callable[[int], str] = str
) -> frozenset[Edge]:
    """Collect every (parent, child) edge the target transitively depends on.

    Walks parents_of depth-first from target with an explicit stack, so
    deep graphs cannot exhaust the interpreter's recursion limit. Each unit
    is expanded once; edges reached along several paths (diamonds) appear
    once in the result.

    Args:
        target: Key of the unit whose closure is wanted.
        graph: Graph to walk. Not modified.
        label: Maps a key to a display name for error messages.

    Raises:
        CycleError: If a unit is reached again while still on the current
            path, i.e. the target's closure contains a cycle.
    """
    edges: set[Edge] = set()
    done: set[int] = set()
    on_path: set[int] = {target}
    stack: list[tuple[int, Iterator[int]]] = [(target, iter(graph.parents_of(target)))]

    while stack:
        node, parents = stack[-1]
        for parent in parents:
            edges.add((parent, node))
            if parent in on_path:
                path = [n for n, _ in stack]
                cycle = path[path.index(parent):] + [parent]
                raise CycleError([label(n) for n in cycle])
            if parent not in done:
                on_path.add(parent)
                stack.append((parent, iter(graph.parents_of(parent))))
                break
        else:
            stack.pop()
            on_path.discard(node)
            done.add(node)

    return frozenset(edges)


def reduce_to_closure(
    target: int, graph: Adjacency, label: Callable[[int], str] = str
) -> tuple[SparseGraph, frozenset[Edge]]:
    """Reduce graph to the target and everything it transitively depends on.

    Returns:
        Tuple of (sparse subgraph, closure edges). The subgraph always
        contains target, even when it has no dependencies.
    """
    edges = collect_deps(target, graph, label)
    nodes = {target}
    for parent, child in edges:
        nodes.add(parent)
        nodes.add(child)
    return SparseGraph.from_edges(nodes, sorted(edges)), edges


def neighbor_edges(keys: Iterable[int], graph: Adjacency) -> frozenset[Edge]:
    """Direct parent and child edges of each unit in keys."""
    edges: set[Edge] = set()
    for key in keys:
        edges.update((parent, key) for parent in graph.parents_of(key))
        edges.update((key, child) for child in graph.children_of(key))
    return frozenset(edges)


def topo_sort(graph: Adjacency, label: Callable[[int], str] = str) -> list[int]:
    """Topologically sort a graph into a build order.

    Uses Kahn's algorithm: start from units with no dependencies, and
    release each dependent once all of its dependencies are placed. Among
    ready units the smallest key always goes first, so the output is
    deterministic.

    The sort works on graph.copy(); the caller's graph is left intact.

    Args:
        graph: Dense or sparse graph to sort.
        label: Maps a key to a display name for error messages.

    Returns:
        List of keys in build order (dependencies first).

    Raises:
        CycleError: If some units could not be placed, which only happens
            when the graph has a cycle.

    Example:
        If A depends on B, and B depends on C:
        topo_sort(graph) → [C, B, A]
    """
    work = graph.copy()
    nodes = list(work.nodes())

    # Start with units that have no dependencies
    frontier = [n for n in nodes if not work.parents_of(n)]
    heapq.heapify(frontier)
    order: list[int] = []

    while frontier:
        node = heapq.heappop(frontier)
        order.append(node)
        for child in work.children_of(node):
            # Repeated edges appear once per entry in both tables
            parents = work.parents_of(child)
            parents.remove(node)
            if not parents:
                heapq.heappush(frontier, child)
        work.children_of(node).clear()

    # If we didn't place every unit, there must be a cycle
    if len(order) != len(nodes):
        placed = set(order)
        raise CycleError([label(n) for n in sorted(nodes) if n not in placed])

    return order
