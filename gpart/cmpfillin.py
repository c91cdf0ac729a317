"""Command that reports the fill-in of a graph under a given ordering."""

from __future__ import annotations

import sys

from gpart.fillin import SubscriptOverflow, compute_fill_in
from gpart.io import GraphFormatError, read_graph, read_po_vector

_RULE = "*" * 70


def _invert(iperm: list[int]) -> list[int]:
    n = len(iperm)
    if sorted(iperm) != list(range(n)):
        raise ValueError("the ordering file does not hold a permutation")
    perm = [0] * n
    for i, position in enumerate(iperm):
        perm[position] = i
    return perm


def main(argv=None) -> int:
    """Read a graph and an inverse permutation and print the factor's fill-in."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("Usage: cmpfillin <GraphFile> <PermFile")
        return 0
    graph_path, perm_path = args

    try:
        graph = read_graph(graph_path)
    except (OSError, GraphFormatError) as exc:
        print(exc, file=sys.stderr)
        return 1

    if graph.nvtxs <= 0:
        print("Empty graph. Nothing to do.")
        return 0
    if graph.ncon != 1:
        print("Ordering can only be applied to graphs with one constraint.")
        return 0

    try:
        iperm = read_po_vector(perm_path, graph.nvtxs)
        perm = _invert(iperm)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1

    print(_RULE)
    print("Graph Information ---------------------------------------------------")
    print(f"  Name: {graph_path}, #Vertices: {graph.nvtxs}, #Edges: {graph.nedges // 2}\n")
    print("Fillin... -----------------------------------------------------------")

    try:
        maxlnz, opc = compute_fill_in(graph, perm, iperm)
    except SubscriptOverflow as exc:
        print(exc, file=sys.stderr)
        return 1

    print(f"  Nonzeros: {float(maxlnz):6.3e} \tOperation Count: {float(opc):6.3e}")
    print(_RULE)
    return 0


if __name__ == "__main__":
    sys.exit(main())