"""Vertex-separator bisections: boundary bookkeeping and projection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from gpart.graph import Graph

SEPARATOR = 2


class BoundaryList:
    """Set of vertices in ``range(n)`` with constant-time insert and delete.

    Deleting a vertex moves the most recently placed one into its slot, so
    iteration order follows that of a packed array.
    """

    def __init__(self, n: int) -> None:
        self._ptr = [-1] * n
        self._ind: list[int] = []

    def _check(self, v: int) -> None:
        if not 0 <= v < len(self._ptr):
            raise IndexError(f"vertex {v} is outside [0, {len(self._ptr)})")

    def insert(self, v: int) -> None:
        """Add ``v``."""
        self._check(v)
        if self._ptr[v] != -1:
            raise ValueError(f"vertex {v} is already in the boundary")
        self._ptr[v] = len(self._ind)
        self._ind.append(v)

    def delete(self, v: int) -> None:
        """Remove ``v``."""
        self._check(v)
        slot = self._ptr[v]
        if slot == -1:
            raise KeyError(f"vertex {v} is not in the boundary")
        last = self._ind.pop()
        if last != v:
            self._ind[slot] = last
            self._ptr[last] = slot
        self._ptr[v] = -1

    def __contains__(self, v: object) -> bool:
        return isinstance(v, int) and 0 <= v < len(self._ptr) and self._ptr[v] != -1

    def __len__(self) -> int:
        return len(self._ind)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._ind))


@dataclass
class NodePartition:
    """A bisection with separator: ``where`` is 0 or 1 for the sides, 2 for the separator.

    ``pwgts`` holds the weights of the two sides and the separator;
    ``edegrees[v]`` holds, for a separator vertex, the weight of its
    neighbours on each side. ``mincut`` is the separator weight.
    """

    where: list[int]
    pwgts: list[int]
    boundary: BoundaryList
    edegrees: list[list[int]]
    mincut: int

    @property
    def nbnd(self) -> int:
        """Number of separator vertices."""
        return len(self.boundary)


def compute_node_partition_params(graph: Graph, where: Sequence[int]) -> NodePartition:
    """Build the separator bookkeeping of ``graph`` for the labelling ``where``."""
    if graph.ncon != 1:
        raise ValueError("node partitions need a graph with one constraint")
    n = graph.nvtxs
    where = list(where)
    if len(where) != n:
        raise ValueError("where must hold one label per vertex")
    for v, side in enumerate(where):
        if side not in (0, 1, SEPARATOR):
            raise ValueError(f"vertex {v} has label {side}, expected 0, 1 or 2")

    vwgt = graph.vwgt if graph.vwgt is not None else [1] * n
    pwgts = [0, 0, 0]
    boundary = BoundaryList(n)
    edegrees = [[0, 0] for _ in range(n)]

    for v, side in enumerate(where):
        pwgts[side] += vwgt[v]
        if side == SEPARATOR:
            boundary.insert(v)
            degrees = edegrees[v]
            for u in graph.neighbors(v):
                other = where[u]
                if other != SEPARATOR:
                    degrees[other] += vwgt[u]

    return NodePartition(where, pwgts, boundary, edegrees, pwgts[SEPARATOR])


def project_node_partition(
    graph: Graph, cmap: Sequence[int], coarse_where: Sequence[int]
) -> NodePartition:
    """Carry a coarse separator to ``graph``; ``cmap[v]`` is v's coarse vertex."""
    if len(cmap) != graph.nvtxs:
        raise ValueError("cmap must hold one coarse vertex per vertex")
    where = [coarse_where[c] for c in cmap]
    return compute_node_partition_params(graph, where)