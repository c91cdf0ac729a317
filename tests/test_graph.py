import pytest

from gpart.graph import Graph, Mesh


def _path_graph(**kwargs):
    return Graph(xadj=[0, 1, 3, 4], adjncy=[1, 0, 2, 1], **kwargs)


def test_neighbors_follow_csr_ranges():
    g = _path_graph()
    assert g.neighbors(0) == [1]
    assert g.neighbors(1) == [0, 2]
    assert g.neighbors(2) == [1]


def test_counts_come_from_arrays():
    g = _path_graph()
    assert g.nvtxs == 3
    assert g.nedges == 4


def test_edge_weights_default_to_one():
    g = _path_graph()
    assert g.edge_weights(1) == [1, 1]


def test_edge_weights_given():
    g = _path_graph(adjwgt=[5, 5, 7, 7])
    assert g.edge_weights(1) == [5, 7]
    assert len(g.edge_weights(2)) == len(g.neighbors(2))


def test_xadj_must_match_adjncy():
    with pytest.raises(ValueError):
        Graph(xadj=[0, 1, 3], adjncy=[1])


def test_vwgt_length_checked_against_ncon():
    with pytest.raises(ValueError):
        _path_graph(ncon=2, vwgt=[1, 1, 1])


def test_decreasing_xadj_rejected():
    with pytest.raises(ValueError):
        Graph(xadj=[0, 2, 1, 2], adjncy=[1, 0])


def test_mesh_element_nodes_and_node_count():
    mesh = Mesh(eptr=[0, 3, 6], eind=[0, 1, 2, 1, 2, 3])
    assert mesh.ne == 2
    assert mesh.element_nodes(1) == [1, 2, 3]
    assert mesh.nn == max(mesh.eind) + 1


def test_mesh_explicit_node_count_kept():
    mesh = Mesh(eptr=[0, 2], eind=[0, 1], nn=10)
    assert mesh.nn == 10


def test_mesh_eptr_past_end_rejected():
    with pytest.raises(ValueError):
        Mesh(eptr=[0, 5], eind=[0, 1])