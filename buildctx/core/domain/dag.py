"""
L1 Domain — dependency graph + topological sort (pure).

Vertices are hashable keys carrying an arbitrary label.  Edges point
from a dependency to its dependent.  No I/O.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)


@dataclass
class TopsortResult(Generic[K]):
    """Outcome of a topological sort.

    Exactly one of ``order`` / ``cycle`` is meaningful: when ``cycle``
    is non-empty the graph is cyclic and ``order`` holds only the
    vertices that could be placed before the cycle blocked progress.
    """

    order: list[K] = field(default_factory=list)
    cycle: list[K] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.cycle


class DependencyGraph(Generic[K]):
    """Directed graph over a fixed vertex set, kept in insertion order."""

    def __init__(self) -> None:
        self._labels: dict[K, Any] = {}
        self._succ: dict[K, list[K]] = {}

    def add_vertex(self, key: K, label: Any = None) -> None:
        if key not in self._labels:
            self._succ[key] = []
        self._labels[key] = label

    def add_edge(self, source: K, target: K) -> None:
        """Add ``source → target`` (``target`` depends on ``source``).

        Raises:
            KeyError: If either end is not a vertex.
        """
        if source not in self._labels:
            raise KeyError(f"Unknown vertex: {source!r}")
        if target not in self._labels:
            raise KeyError(f"Unknown vertex: {target!r}")
        if target not in self._succ[source]:
            self._succ[source].append(target)

    def label(self, key: K) -> Any:
        return self._labels[key]

    def vertices(self) -> list[K]:
        return list(self._labels)

    def edges(self) -> list[tuple[K, K]]:
        return [(s, t) for s, targets in self._succ.items() for t in targets]

    def __contains__(self, key: object) -> bool:
        return key in self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def topsort(self) -> TopsortResult[K]:
        return topsort(self.vertices(), self.edges())


def topsort(vertices: list[K], edges: list[tuple[K, K]]) -> TopsortResult[K]:
    """Sort vertices so every edge source precedes its target.

    Kahn's algorithm.  Ready vertices are taken in the order they
    appear in ``vertices``, so the result is deterministic for a given
    input.  Vertices still holding in-degree > 0 once no vertex is
    ready form (or sit downstream of) a cycle.
    """
    index = {v: i for i, v in enumerate(vertices)}
    in_degree: dict[K, int] = {v: 0 for v in vertices}
    adj: dict[K, list[K]] = {v: [] for v in vertices}

    for source, target in edges:
        adj[source].append(target)
        in_degree[target] += 1

    # Heap of vertex positions: the earliest-discovered ready vertex goes first
    ready = [index[v] for v in vertices if in_degree[v] == 0]
    heapq.heapify(ready)
    order: list[K] = []

    while ready:
        node = vertices[heapq.heappop(ready)]
        order.append(node)
        for successor in adj[node]:
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                heapq.heappush(ready, index[successor])

    if len(order) < len(vertices):
        leftover = [v for v in vertices if in_degree[v] > 0]
        return TopsortResult(order=order, cycle=leftover)

    return TopsortResult(order=order)
