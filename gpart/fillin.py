"""Symbolic Cholesky factorisation and fill-in of a fill-reducing ordering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from gpart.graph import Graph


class SubscriptOverflow(RuntimeError):
    """The subscript storage is too small for the structure of the factor."""


@dataclass(frozen=True)
class SymbolicFactor:
    """Structure of the Cholesky factor L of a permuted matrix.

    ``xlnz[k]:xlnz[k+1]`` spans the below-diagonal nonzeros of column ``k``
    (columns in elimination order). ``nsub`` is the start of the last
    column's subscripts in the compressed subscript storage.
    """

    maxlnz: int
    xlnz: tuple[int, ...]
    nsub: int

    @property
    def column_counts(self) -> list[int]:
        """Below-diagonal nonzeros of each column."""
        return [b - a for a, b in zip(self.xlnz, self.xlnz[1:])]


def _check_ordering(perm: Sequence[int], invp: Sequence[int]) -> None:
    n = len(perm)
    if len(invp) != n:
        raise ValueError("perm and invp must have the same length")
    if sorted(perm) != list(range(n)):
        raise ValueError("perm is not a permutation")
    if any(invp[p] != k for k, p in enumerate(perm)):
        raise ValueError("invp is not the inverse of perm")


def symbolic_factorization(
    xadj: Sequence[int],
    adjncy: Sequence[int],
    perm: Sequence[int],
    invp: Sequence[int],
    maxsub: int,
) -> SymbolicFactor:
    """Compute the nonzero structure of L for the ordering ``perm``.

    ``perm[k]`` is the vertex eliminated ``k``-th and ``invp`` its inverse;
    all indices are 0-based. ``maxsub`` bounds the compressed subscript
    storage; SubscriptOverflow is raised when it does not suffice.
    """
    neqns = len(perm)
    if len(xadj) != neqns + 1:
        raise ValueError("xadj must hold one entry more than perm")
    if xadj[-1] > len(adjncy):
        raise ValueError("xadj points past the end of adjncy")
    _check_ordering(perm, invp)
    if neqns == 0:
        return SymbolicFactor(0, (0,), 0)

    # Work in 1-based positions; slot 0 is unused.
    xadj1 = [0] + [x + 1 for x in xadj]
    adjncy1 = [0] + [a + 1 for a in adjncy]
    perm1 = [0] + [p + 1 for p in perm]
    invp1 = [0] + [p + 1 for p in invp]

    size = neqns + 2
    xlnz = [0] * size
    xnzsub = [0] * size
    rchlnk = [0] * size
    marker = [0] * size
    mrglnk = [0] * size
    nzsub = [0] * (max(maxsub, 0) + 2)

    nzbeg, nzend = 1, 0
    xlnz[1] = 1

    for k in range(1, neqns + 1):
        xnzsub[k] = nzend
        node = perm1[k]
        knz = 0
        mrgk = mrglnk[k]
        mrkflg = False
        marker[k] = marker[mrgk] if mrgk != 0 else k

        if xadj1[node] >= xadj1[node + 1]:
            xlnz[k + 1] = xlnz[k]
            continue

        # Link the structure of A(*,k) below the diagonal through rchlnk.
        rchlnk[k] = neqns + 1
        for j in range(xadj1[node], xadj1[node + 1]):
            nabor = invp1[adjncy1[j]]
            if nabor <= k:
                continue
            rchm = k
            while True:
                m = rchm
                rchm = rchlnk[m]
                if rchm > nabor:
                    break
            knz += 1
            rchlnk[m] = nabor
            rchlnk[nabor] = rchm
            if marker[nabor] != marker[k]:
                mrkflg = True

        lmax = 0
        if not mrkflg and mrgk != 0 and mrglnk[mrgk] == 0:
            # Mass symbolic elimination: column k reuses column mrgk.
            xnzsub[k] = xnzsub[mrgk] + 1
            knz = xlnz[mrgk + 1] - (xlnz[mrgk] + 1)
            copy = False
        else:
            # Merge the structure of every column i that affects L(*,k).
            i = k
            while (i := mrglnk[i]) != 0:
                inz = xlnz[i + 1] - (xlnz[i] + 1)
                jstrt = xnzsub[i] + 1
                jstop = xnzsub[i] + inz
                if inz > lmax:
                    lmax = inz
                    xnzsub[k] = jstrt
                rchm = k
                for j in range(jstrt, jstop + 1):
                    nabor = nzsub[j]
                    while True:
                        m = rchm
                        rchm = rchlnk[m]
                        if rchm >= nabor:
                            break
                    if rchm != nabor:
                        knz += 1
                        rchlnk[m] = nabor
                        rchlnk[nabor] = rchm
                        rchm = nabor

            if knz == lmax:
                copy = False
            elif nzbeg > nzend:
                copy = True
            else:
                # Does the tail of the previous column match the head of this one?
                i = rchlnk[k]
                start = None
                for jstrt in range(nzbeg, nzend + 1):
                    if nzsub[jstrt] < i:
                        continue
                    if nzsub[jstrt] == i:
                        start = jstrt
                    break
                copy = True
                if start is not None:
                    xnzsub[k] = start
                    for j in range(start, nzend + 1):
                        if nzsub[j] != i:
                            break
                        i = rchlnk[i]
                        if i > neqns:
                            copy = False
                            break
                    else:
                        nzend = start - 1

        if copy:
            nzbeg = nzend + 1
            nzend += knz
            if nzend >= maxsub:
                raise SubscriptOverflow("MAXSUB is too small!")
            i = k
            for j in range(nzbeg, nzend + 1):
                i = rchlnk[i]
                nzsub[j] = i
                marker[i] = k
            xnzsub[k] = nzbeg
            marker[k] = k

        # Column k is needed for column j, where L(j,k) is its first nonzero.
        if knz > 1:
            i = nzsub[xnzsub[k]]
            mrglnk[k] = mrglnk[i]
            mrglnk[i] = k

        xlnz[k + 1] = xlnz[k] + knz

    maxlnz = xlnz[neqns] - 1
    nsub = xnzsub[neqns]
    return SymbolicFactor(maxlnz, tuple(x - 1 for x in xlnz[1 : neqns + 2]), nsub)


def compute_fill_in(graph: Graph, perm: Sequence[int], iperm: Sequence[int]) -> tuple[int, int]:
    """Return ``(nonzeros, operation count)`` of the factor under ``perm``.

    ``perm[k]`` is the vertex ordered ``k``-th; ``iperm`` is its inverse.
    """
    n = graph.nvtxs
    if len(perm) != n or len(iperm) != n:
        raise ValueError("perm and iperm must have one entry per vertex")

    maxsub = 8 * (n + graph.nedges)
    try:
        factor = symbolic_factorization(graph.xadj, graph.adjncy, perm, iperm, maxsub)
    except SubscriptOverflow:
        factor = symbolic_factorization(graph.xadj, graph.adjncy, perm, iperm, 2 * maxsub)

    counts = factor.column_counts
    if counts:
        # The last column is measured with its diagonal included.
        counts[-1] += 1
    opc = sum(c * c - c for c in counts)
    return factor.maxlnz, opc