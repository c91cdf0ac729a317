import pytest

from gpart.graph import Graph
from gpart.nodefm import (
    RefineControl,
    balance_node_partition,
    refine_node_levels,
    refine_one_sided,
    refine_two_sided,
)
from gpart.nodepart import compute_node_partition_params
from gpart.options import RType


def _from_lists(adj):
    xadj = [0]
    adjncy = []
    for nbrs in adj:
        adjncy.extend(nbrs)
        xadj.append(len(adjncy))
    return Graph(xadj, adjncy)


def path_graph(n):
    return _from_lists([[u for u in (v - 1, v + 1) if 0 <= u < n] for v in range(n)])


def grid_graph(rows, cols):
    adj = []
    for r in range(rows):
        for c in range(cols):
            nbrs = []
            for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                rr, cc = r + dr, c + dc
                if 0 <= rr < rows and 0 <= cc < cols:
                    nbrs.append(rr * cols + cc)
            adj.append(nbrs)
    return _from_lists(adj)


def grid_where(rows, cols, sep_cols):
    where = []
    for _ in range(rows):
        for c in range(cols):
            if c in sep_cols:
                where.append(2)
            elif c < min(sep_cols):
                where.append(0)
            else:
                where.append(1)
    return where


def assert_consistent(graph, part):
    fresh = compute_node_partition_params(graph, part.where)
    assert part.pwgts == fresh.pwgts
    assert part.mincut == fresh.mincut == part.pwgts[2]
    assert set(part.boundary) == set(fresh.boundary)
    for v in fresh.boundary:
        assert part.edegrees[v] == fresh.edegrees[v]
    for v in range(graph.nvtxs):
        for u in graph.neighbors(v):
            assert {part.where[v], part.where[u]} != {0, 1}


@pytest.mark.parametrize("refine", [refine_two_sided, refine_one_sided])
@pytest.mark.parametrize("seed", [1, 7, 42])
def test_wide_separator_shrinks(refine, seed):
    graph = grid_graph(4, 6)
    part = compute_node_partition_params(graph, grid_where(4, 6, {2, 3}))
    initial = part.mincut
    result = refine(RefineControl(seed=seed), graph, part, 10)
    assert result is part
    assert part.mincut < initial
    assert_consistent(graph, part)


@pytest.mark.parametrize("refine", [refine_two_sided, refine_one_sided])
def test_path_separator_improves(refine):
    graph = path_graph(6)
    part = compute_node_partition_params(graph, [0, 2, 2, 2, 1, 1])
    refine(RefineControl(), graph, part, 10)
    assert part.mincut < 3
    assert_consistent(graph, part)


@pytest.mark.parametrize("refine", [refine_two_sided, refine_one_sided])
@pytest.mark.parametrize("seed", [3, 11])
def test_never_worsens(refine, seed):
    graph = grid_graph(5, 5)
    part = compute_node_partition_params(graph, grid_where(5, 5, {2}))
    initial = part.mincut
    refine(RefineControl(seed=seed, compress=False), graph, part, 5)
    assert part.mincut <= initial
    assert_consistent(graph, part)


def test_zero_iterations_leave_partition_alone():
    graph = path_graph(6)
    where = [0, 2, 2, 2, 1, 1]
    part = compute_node_partition_params(graph, where)
    refine_two_sided(RefineControl(), graph, part, 0)
    assert part.where == where
    assert part.mincut == 3


def test_same_seed_same_result():
    graph = grid_graph(4, 6)
    results = []
    for _ in range(2):
        part = compute_node_partition_params(graph, grid_where(4, 6, {2, 3}))
        refine_two_sided(RefineControl(seed=5), graph, part, 10)
        results.append(list(part.where))
    assert results[0] == results[1]


def test_balance_moves_toward_lighter_side():
    graph = path_graph(7)
    part = compute_node_partition_params(graph, [0, 2, 1, 1, 1, 1, 1])
    before = abs(part.pwgts[0] - part.pwgts[1])
    balance_node_partition(RefineControl(), graph, part)
    assert abs(part.pwgts[0] - part.pwgts[1]) < before
    assert_consistent(graph, part)


def test_balance_skips_balanced_partition():
    graph = path_graph(5)
    where = [0, 0, 2, 1, 1]
    part = compute_node_partition_params(graph, where)
    balance_node_partition(RefineControl(), graph, part)
    assert part.where == where
    assert part.pwgts == [2, 2, 1]


@pytest.mark.parametrize("rtype", [RType.SEP1SIDED, RType.SEP2SIDED])
def test_levels_project_and_refine(rtype):
    coarse = path_graph(3)
    fine = path_graph(6)
    levels = [(coarse, None), (fine, [0, 0, 1, 1, 2, 2])]
    part = refine_node_levels(RefineControl(rtype=rtype), levels, [0, 2, 1])
    assert len(part.where) == 6
    assert part.mincut <= 2
    assert_consistent(fine, part)


def test_single_level_only_computes_params():
    graph = path_graph(5)
    part = refine_node_levels(RefineControl(), [(graph, None)], [0, 0, 2, 1, 1])
    assert part.where == [0, 0, 2, 1, 1]
    assert part.pwgts == [2, 2, 1]


def test_unknown_rtype_raises():
    levels = [(path_graph(3), None), (path_graph(6), [0, 0, 1, 1, 2, 2])]
    with pytest.raises(ValueError):
        refine_node_levels(RefineControl(rtype=RType.FM), levels, [0, 2, 1])


def test_empty_levels_raise():
    with pytest.raises(ValueError):
        refine_node_levels(RefineControl(), [], [])


def test_mismatched_partition_raises():
    graph = path_graph(6)
    part = compute_node_partition_params(path_graph(5), [0, 0, 2, 1, 1])
    with pytest.raises(ValueError):
        refine_two_sided(RefineControl(), graph, part, 1)