import random

import pytest

from gpart.fillin import SubscriptOverflow, compute_fill_in, symbolic_factorization
from gpart.graph import Graph


def make_graph(n, edges):
    adj = [[] for _ in range(n)]
    for u, v in edges:
        adj[u].append(v)
        adj[v].append(u)
    xadj, adjncy = [0], []
    for nbrs in adj:
        adjncy.extend(sorted(nbrs))
        xadj.append(len(adjncy))
    return Graph(xadj, adjncy)


def inverse(perm):
    inv = [0] * len(perm)
    for k, p in enumerate(perm):
        inv[p] = k
    return inv


def complete(n):
    return make_graph(n, [(u, v) for u in range(n) for v in range(u + 1, n)])


def star(n):
    return make_graph(n, [(0, v) for v in range(1, n)])


def test_path_identity_has_no_fill():
    graph = make_graph(3, [(0, 1), (1, 2)])
    perm = [0, 1, 2]
    assert compute_fill_in(graph, perm, inverse(perm)) == (2, 0)


def test_complete_graph_factor_matches_its_edges():
    graph = complete(5)
    perm = [4, 2, 0, 3, 1]
    maxlnz, opc = compute_fill_in(graph, perm, inverse(perm))
    assert maxlnz == graph.nedges // 2
    assert opc > 0


def test_star_centre_first_fills_completely():
    n = 6
    perm = list(range(n))
    assert compute_fill_in(star(n), perm, inverse(perm)) == compute_fill_in(
        complete(n), perm, inverse(perm)
    )


def test_star_centre_last_has_no_fill():
    n = 6
    graph = star(n)
    perm = list(range(1, n)) + [0]
    maxlnz, _ = compute_fill_in(graph, perm, inverse(perm))
    assert maxlnz == graph.nedges // 2


@pytest.mark.parametrize("seed", range(5))
def test_fill_bounds_for_random_orderings(seed):
    rng = random.Random(seed)
    n = 8
    edges = [(i, (i + 1) % n) for i in range(n)] + [(0, 4), (2, 6)]
    graph = make_graph(n, edges)
    perm = list(range(n))
    rng.shuffle(perm)
    maxlnz, opc = compute_fill_in(graph, perm, inverse(perm))
    assert graph.nedges // 2 <= maxlnz <= n * (n - 1) // 2
    assert opc >= 0


def test_graph_left_unchanged():
    graph = make_graph(4, [(0, 1), (1, 2), (2, 3), (3, 0)])
    xadj, adjncy = list(graph.xadj), list(graph.adjncy)
    perm = [2, 0, 3, 1]
    compute_fill_in(graph, perm, inverse(perm))
    assert graph.xadj == xadj
    assert graph.adjncy == adjncy


def test_column_counts_sum_to_nonzeros():
    graph = make_graph(5, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0), (1, 3)])
    perm = [1, 3, 0, 4, 2]
    factor = symbolic_factorization(graph.xadj, graph.adjncy, perm, inverse(perm), 200)
    assert factor.xlnz[0] == 0
    assert sum(factor.column_counts) == factor.maxlnz
    assert factor.column_counts[-1] == 0


def test_small_subscript_storage_overflows():
    graph = make_graph(3, [(0, 1), (1, 2)])
    perm = [0, 1, 2]
    with pytest.raises(SubscriptOverflow):
        symbolic_factorization(graph.xadj, graph.adjncy, perm, perm, 1)


def test_mismatched_inverse_is_rejected():
    graph = make_graph(3, [(0, 1), (1, 2)])
    with pytest.raises(ValueError):
        symbolic_factorization(graph.xadj, graph.adjncy, [0, 1, 2], [1, 0, 2], 100)


def test_wrong_length_ordering_is_rejected():
    graph = make_graph(3, [(0, 1), (1, 2)])
    with pytest.raises(ValueError):
        compute_fill_in(graph, [0, 1], [0, 1])