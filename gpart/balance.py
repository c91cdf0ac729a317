"""Load balance of graph and element partitionings."""

from __future__ import annotations

from typing import Sequence

from gpart.graph import Graph


def _check_labels(where: Sequence[int], nparts: int) -> None:
    if nparts < 1:
        raise ValueError("nparts must be at least 1")
    for i, p in enumerate(where):
        if not 0 <= p < nparts:
            raise ValueError(f"entry {i} has partition {p}, outside [0, {nparts})")


def partition_balance(graph: Graph, nparts: int, where: Sequence[int]) -> list[float]:
    """Per-constraint ratio of the heaviest partition to the average partition."""
    if len(where) != graph.nvtxs:
        raise ValueError("where must hold one partition per vertex")
    _check_labels(where, nparts)

    if graph.vwgt is None:
        counts = [0] * nparts
        for p in where:
            counts[p] += 1
        return [nparts * max(counts) / graph.nvtxs]

    ncon = graph.ncon
    ubvec: list[float] = []
    for j in range(ncon):
        kpwgts = [0] * nparts
        for i, p in enumerate(where):
            kpwgts[p] += graph.vwgt[i * ncon + j]
        ubvec.append(nparts * max(kpwgts) / sum(kpwgts))
    return ubvec


def element_balance(nparts: int, where: Sequence[int]) -> float:
    """Ratio of the largest partition's element count to the average count."""
    _check_labels(where, nparts)
    if not where:
        raise ValueError("where must not be empty")
    counts = [0] * nparts
    for p in where:
        counts[p] += 1
    return nparts * max(counts) / len(where)