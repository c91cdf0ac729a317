"""FM refinement and balancing of vertex-separator bisections."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

from gpart.graph import Graph
from gpart.nodepart import (
    SEPARATOR,
    NodePartition,
    compute_node_partition_params,
    project_node_partition,
)
from gpart.options import RType
from gpart.pqueue import MaxPriorityQueue
from gpart.util import init_random


@dataclass
class RefineControl:
    """Settings that steer separator refinement.

    ``ubfactor`` is the allowed load imbalance (1.2 means 20%), ``compress``
    tells whether the graph was compressed, which lengthens the search.
    """

    ubfactor: float = 1.2
    compress: bool = True
    rtype: RType = RType.SEP1SIDED
    niter: int = 10
    seed: int = -1
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = init_random(self.seed)


def _vertex_weights(graph: Graph, part: NodePartition) -> list[int]:
    if graph.ncon != 1:
        raise ValueError("node refinement needs a graph with one constraint")
    if len(part.where) != graph.nvtxs:
        raise ValueError("the partition does not match the graph")
    return graph.vwgt if graph.vwgt is not None else [1] * graph.nvtxs


def _shuffled_boundary(ctrl: RefineControl, part: NodePartition) -> list[int]:
    order = list(part.boundary)
    ctrl.rng.shuffle(order)
    return order


def _update(queue: MaxPriorityQueue, node: int, key: float) -> None:
    if node in queue:
        queue.update(node, key)


def _discard(queue: MaxPriorityQueue, node: int) -> None:
    if node in queue:
        queue.delete(node)


def _degree(graph: Graph, v: int) -> int:
    return graph.xadj[v + 1] - graph.xadj[v]


def _pull_into_separator(graph, part, vwgt, k, side):
    """Move ``k`` from ``side`` into the separator and recompute its degrees."""
    where, edeg = part.where, part.edegrees
    part.boundary.insert(k)
    where[k] = SEPARATOR
    part.pwgts[side] -= vwgt[k]
    degrees = edeg[k]
    degrees[0] = degrees[1] = 0
    return degrees


def _rollback(graph, part, vwgt, moves, mincutorder) -> None:
    """Undo the recorded moves made after position ``mincutorder``."""
    where, pwgts, edeg, bnd = part.where, part.pwgts, part.edegrees, part.boundary
    while len(moves) > mincutorder + 1:
        higain, pulled = moves.pop()
        to = where[higain]
        other = 1 - to
        pwgts[SEPARATOR] += vwgt[higain]
        pwgts[to] -= vwgt[higain]
        where[higain] = SEPARATOR
        bnd.insert(higain)

        degrees = edeg[higain]
        degrees[0] = degrees[1] = 0
        for k in graph.neighbors(higain):
            if where[k] == SEPARATOR:
                edeg[k][to] -= vwgt[higain]
            else:
                degrees[where[k]] += vwgt[k]

        # Push the vertices this move drew in back out of the separator.
        for k in pulled:
            where[k] = other
            pwgts[other] += vwgt[k]
            pwgts[SEPARATOR] -= vwgt[k]
            bnd.delete(k)
            for kk in graph.neighbors(k):
                if where[kk] == SEPARATOR:
                    edeg[kk][other] += vwgt[k]


def refine_two_sided(
    ctrl: RefineControl, graph: Graph, part: NodePartition, niter: int
) -> NodePartition:
    """Shrink the separator by moving vertices to either side; ``part`` is updated."""
    vwgt = _vertex_weights(graph, part)
    n = graph.nvtxs
    where, pwgts, edeg, bnd = part.where, part.pwgts, part.edegrees, part.boundary
    queues = (MaxPriorityQueue(n), MaxPriorityQueue(n))
    badmaxpwgt = int(0.5 * ctrl.ubfactor * sum(pwgts))

    for npass in range(niter):
        moved = [-1] * n
        for queue in queues:
            queue.reset()

        mincutorder = -1
        initcut = mincut = part.mincut
        nbnd = len(bnd)

        for i in _shuffled_boundary(ctrl, part):
            queues[0].insert(i, vwgt[i] - edeg[i][1])
            queues[1].insert(i, vwgt[i] - edeg[i][0])

        limit = min(5 * nbnd, 400) if ctrl.compress else min(2 * nbnd, 300)

        moves: list[tuple[int, list[int]]] = []
        nmind = 0
        mindiff = abs(pwgts[0] - pwgts[1])
        to = 0 if pwgts[0] < pwgts[1] else 1

        for nswaps in range(n):
            u = (queues[0].see_top(), queues[1].see_top())
            if u[0] is not None and u[1] is not None:
                g0 = vwgt[u[0]] - edeg[u[0]][1]
                g1 = vwgt[u[1]] - edeg[u[1]][0]
                to = 0 if g0 > g1 else (1 if g0 < g1 else npass % 2)
                if pwgts[to] + vwgt[u[to]] > badmaxpwgt:
                    to = 1 - to
            elif u[0] is None and u[1] is None:
                break
            elif u[0] is not None and pwgts[0] + vwgt[u[0]] <= badmaxpwgt:
                to = 0
            elif u[1] is not None and pwgts[1] + vwgt[u[1]] <= badmaxpwgt:
                to = 1
            else:
                break

            other = 1 - to
            higain = queues[to].pop_top()
            if moved[higain] == -1:
                _discard(queues[other], higain)

            if nmind + _degree(graph, higain) >= 2 * n - 1:
                break

            gain = vwgt[higain] - edeg[higain][other]
            pwgts[SEPARATOR] -= gain

            newdiff = abs(pwgts[to] + vwgt[higain] - (pwgts[other] - edeg[higain][other]))
            if pwgts[SEPARATOR] < mincut or (pwgts[SEPARATOR] == mincut and newdiff < mindiff):
                mincut = pwgts[SEPARATOR]
                mincutorder = nswaps
                mindiff = newdiff
            elif nswaps - mincutorder > 2 * limit or (
                nswaps - mincutorder > limit and pwgts[SEPARATOR] > 1.10 * mincut
            ):
                pwgts[SEPARATOR] += gain
                break

            bnd.delete(higain)
            pwgts[to] += vwgt[higain]
            where[higain] = to
            moved[higain] = nswaps

            pulled: list[int] = []
            for k in graph.neighbors(higain):
                if where[k] == SEPARATOR:
                    oldgain = vwgt[k] - edeg[k][to]
                    edeg[k][to] += vwgt[higain]
                    if moved[k] == -1 or moved[k] == -(2 + other):
                        _update(queues[other], k, oldgain - vwgt[higain])
                elif where[k] == other:
                    pulled.append(k)
                    degrees = _pull_into_separator(graph, part, vwgt, k, other)
                    for kk in graph.neighbors(k):
                        if where[kk] != SEPARATOR:
                            degrees[where[kk]] += vwgt[kk]
                        else:
                            oldgain = vwgt[kk] - edeg[kk][other]
                            edeg[kk][other] -= vwgt[k]
                            if moved[kk] == -1 or moved[kk] == -(2 + to):
                                _update(queues[to], kk, oldgain + vwgt[k])
                    # Only one side's queue gets the new separator vertex.
                    if moved[k] == -1:
                        queues[to].insert(k, vwgt[k] - degrees[other])
                        moved[k] = -(2 + to)
            nmind += len(pulled)
            moves.append((higain, pulled))

        _rollback(graph, part, vwgt, moves, mincutorder)
        part.mincut = mincut

        if mincutorder == -1 or mincut >= initcut:
            break

    return part


def refine_one_sided(
    ctrl: RefineControl, graph: Graph, part: NodePartition, niter: int
) -> NodePartition:
    """Shrink the separator with passes that alternately move to one side only."""
    vwgt = _vertex_weights(graph, part)
    n = graph.nvtxs
    where, pwgts, edeg, bnd = part.where, part.pwgts, part.edegrees, part.boundary
    queue = MaxPriorityQueue(n)
    badmaxpwgt = int(0.5 * ctrl.ubfactor * sum(pwgts))

    to = 1 if pwgts[0] < pwgts[1] else 0
    for npass in range(2 * niter):
        other = to
        to = 1 - to

        queue.reset()
        mincutorder = -1
        initcut = mincut = part.mincut
        nbnd = len(bnd)

        for i in _shuffled_boundary(ctrl, part):
            queue.insert(i, vwgt[i] - edeg[i][other])

        limit = min(5 * nbnd, 500) if ctrl.compress else min(3 * nbnd, 300)

        moves: list[tuple[int, list[int]]] = []
        nmind = 0
        mindiff = abs(pwgts[0] - pwgts[1])

        for nswaps in range(n):
            if not len(queue):
                break
            higain = queue.pop_top()

            if nmind + _degree(graph, higain) >= 2 * n - 1:
                break
            if pwgts[to] + vwgt[higain] > badmaxpwgt:
                break

            gain = vwgt[higain] - edeg[higain][other]
            pwgts[SEPARATOR] -= gain

            newdiff = abs(pwgts[to] + vwgt[higain] - (pwgts[other] - edeg[higain][other]))
            if pwgts[SEPARATOR] < mincut or (pwgts[SEPARATOR] == mincut and newdiff < mindiff):
                mincut = pwgts[SEPARATOR]
                mincutorder = nswaps
                mindiff = newdiff
            elif nswaps - mincutorder > 3 * limit or (
                nswaps - mincutorder > limit and pwgts[SEPARATOR] > 1.10 * mincut
            ):
                pwgts[SEPARATOR] += gain
                break

            bnd.delete(higain)
            pwgts[to] += vwgt[higain]
            where[higain] = to

            pulled: list[int] = []
            for k in graph.neighbors(higain):
                if where[k] == SEPARATOR:
                    edeg[k][to] += vwgt[higain]
                elif where[k] == other:
                    pulled.append(k)
                    degrees = _pull_into_separator(graph, part, vwgt, k, other)
                    for kk in graph.neighbors(k):
                        if where[kk] != SEPARATOR:
                            degrees[where[kk]] += vwgt[kk]
                        else:
                            edeg[kk][other] -= vwgt[k]
                            _update(queue, kk, vwgt[kk] - edeg[kk][other])
                    queue.insert(k, vwgt[k] - degrees[other])
            nmind += len(pulled)
            moves.append((higain, pulled))

        _rollback(graph, part, vwgt, moves, mincutorder)
        part.mincut = mincut

        if npass % 2 == 1 and (mincutorder == -1 or mincut >= initcut):
            break

    return part


def balance_node_partition(
    ctrl: RefineControl, graph: Graph, part: NodePartition
) -> NodePartition:
    """Move separator vertices toward the lighter side until the sides balance."""
    vwgt = _vertex_weights(graph, part)
    n = graph.nvtxs
    where, pwgts, edeg, bnd = part.where, part.pwgts, part.edegrees, part.boundary
    mult = 0.5 * ctrl.ubfactor

    badmaxpwgt = int(mult * (pwgts[0] + pwgts[1]))
    if max(pwgts[0], pwgts[1]) < badmaxpwgt:
        return part
    if abs(pwgts[0] - pwgts[1]) < 3 * sum(vwgt) // n:
        return part

    to = 0 if pwgts[0] < pwgts[1] else 1
    other = 1 - to

    queue = MaxPriorityQueue(n)
    moved = [-1] * n

    for i in _shuffled_boundary(ctrl, part):
        queue.insert(i, vwgt[i] - edeg[i][other])

    for _ in range(n):
        if not len(queue):
            break
        higain = queue.pop_top()
        moved[higain] = 1

        gain = vwgt[higain] - edeg[higain][other]
        badmaxpwgt = int(mult * (pwgts[0] + pwgts[1]))

        if pwgts[to] > pwgts[other]:
            break
        if gain < 0 and pwgts[other] < badmaxpwgt:
            break
        if pwgts[to] + vwgt[higain] > badmaxpwgt:
            continue

        pwgts[SEPARATOR] -= gain
        bnd.delete(higain)
        pwgts[to] += vwgt[higain]
        where[higain] = to

        for k in graph.neighbors(higain):
            if where[k] == SEPARATOR:
                edeg[k][to] += vwgt[higain]
            elif where[k] == other:
                degrees = _pull_into_separator(graph, part, vwgt, k, other)
                for kk in graph.neighbors(k):
                    if where[kk] != SEPARATOR:
                        degrees[where[kk]] += vwgt[kk]
                    else:
                        oldgain = vwgt[kk] - edeg[kk][other]
                        edeg[kk][other] -= vwgt[k]
                        if moved[kk] == -1:
                            _update(queue, kk, oldgain + vwgt[k])
                queue.insert(k, vwgt[k] - degrees[other])

    part.mincut = pwgts[SEPARATOR]
    return part


def refine_node_levels(
    ctrl: RefineControl,
    levels: Sequence[tuple[Graph, Optional[Sequence[int]]]],
    coarse_where: Sequence[int],
) -> NodePartition:
    """Carry a separator from the coarsest level to the finest, refining each.

    ``levels`` lists ``(graph, cmap)`` pairs from coarsest to finest; the
    first graph is labelled by ``coarse_where`` and its cmap is ignored, and
    every later cmap maps its graph's vertices onto the previous level.
    """
    if not levels:
        raise ValueError("at least one level is required")

    graph, _ = levels[0]
    part = compute_node_partition_params(graph, coarse_where)
    for graph, cmap in levels[1:]:
        if cmap is None:
            raise ValueError("every finer level needs a cmap")
        part = project_node_partition(graph, cmap, part.where)
        balance_node_partition(ctrl, graph, part)
        if ctrl.rtype == RType.SEP2SIDED:
            refine_two_sided(ctrl, graph, part, ctrl.niter)
        elif ctrl.rtype == RType.SEP1SIDED:
            refine_one_sided(ctrl, graph, part, ctrl.niter)
        else:
            raise ValueError(f"Unknown rtype of {int(ctrl.rtype)}")
    return part