"""Graphs in compressed sparse row form, and element meshes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Graph:
    """Undirected graph stored as adjacency lists in CSR form.

    ``xadj[v]:xadj[v+1]`` indexes the neighbours of ``v`` in ``adjncy``.
    Each undirected edge appears twice. ``vwgt`` holds ``ncon`` weights per
    vertex; ``adjwgt`` and ``vsize`` may be None, meaning all ones.
    """

    xadj: list[int]
    adjncy: list[int]
    ncon: int = 1
    vwgt: Optional[list[int]] = None
    adjwgt: Optional[list[int]] = None
    vsize: Optional[list[int]] = None

    def __post_init__(self) -> None:
        self.xadj = list(self.xadj)
        self.adjncy = list(self.adjncy)
        if not self.xadj:
            raise ValueError("xadj must hold at least one entry")
        if self.ncon < 1:
            raise ValueError("ncon must be at least 1")
        if self.xadj[-1] != len(self.adjncy):
            raise ValueError("xadj does not match the length of adjncy")
        if any(a > b for a, b in zip(self.xadj, self.xadj[1:])):
            raise ValueError("xadj must be non-decreasing")
        if self.vwgt is not None:
            self.vwgt = list(self.vwgt)
            if len(self.vwgt) != self.nvtxs * self.ncon:
                raise ValueError("vwgt must hold ncon weights per vertex")
        if self.adjwgt is not None:
            self.adjwgt = list(self.adjwgt)
            if len(self.adjwgt) != len(self.adjncy):
                raise ValueError("adjwgt must hold one weight per adjacency entry")
        if self.vsize is not None:
            self.vsize = list(self.vsize)
            if len(self.vsize) != self.nvtxs:
                raise ValueError("vsize must hold one size per vertex")

    @property
    def nvtxs(self) -> int:
        """Number of vertices."""
        return len(self.xadj) - 1

    @property
    def nedges(self) -> int:
        """Number of adjacency entries (twice the number of edges)."""
        return self.xadj[-1]

    def neighbors(self, v: int) -> list[int]:
        """Vertices adjacent to ``v``."""
        return self.adjncy[self.xadj[v] : self.xadj[v + 1]]

    def edge_weights(self, v: int) -> list[int]:
        """Weights of the edges leaving ``v``, in neighbour order."""
        start, end = self.xadj[v], self.xadj[v + 1]
        if self.adjwgt is None:
            return [1] * (end - start)
        return self.adjwgt[start:end]


@dataclass
class Mesh:
    """Mesh of elements, each a list of node numbers, in CSR form."""

    eptr: list[int]
    eind: list[int]
    ewgt: Optional[list[int]] = None
    ncon: int = 1
    nn: Optional[int] = None

    def __post_init__(self) -> None:
        self.eptr = list(self.eptr)
        self.eind = list(self.eind)
        if not self.eptr:
            raise ValueError("eptr must hold at least one entry")
        if self.eptr[-1] > len(self.eind):
            raise ValueError("eptr points past the end of eind")
        if any(a > b for a, b in zip(self.eptr, self.eptr[1:])):
            raise ValueError("eptr must be non-decreasing")
        if self.ncon < 1:
            raise ValueError("ncon must be at least 1")
        if self.ewgt is not None:
            self.ewgt = list(self.ewgt)
        if self.nn is None:
            self.nn = max(self.eind[: self.eptr[-1]], default=-1) + 1

    @property
    def ne(self) -> int:
        """Number of elements."""
        return len(self.eptr) - 1

    def element_nodes(self, e: int) -> list[int]:
        """Nodes of element ``e``."""
        return self.eind[self.eptr[e] : self.eptr[e + 1]]