import pytest

from gpart.cmpfillin import main
from gpart.fillin import compute_fill_in
from gpart.io import read_graph


@pytest.fixture
def path_graph(tmp_path):
    path = tmp_path / "path.graph"
    path.write_text("3 2\n2\n1 3\n2\n")
    return path


def write_perm(tmp_path, values):
    path = tmp_path / "perm.txt"
    path.write_text("".join(f"{v}\n" for v in values))
    return path


def test_reports_fill_in(tmp_path, path_graph, capsys):
    iperm = [2, 0, 1]
    perm_path = write_perm(tmp_path, iperm)
    assert main([str(path_graph), str(perm_path)]) == 0
    out = capsys.readouterr().out
    assert "#Vertices: 3, #Edges: 2" in out
    perm = [0] * 3
    for i, p in enumerate(iperm):
        perm[p] = i
    maxlnz, opc = compute_fill_in(read_graph(path_graph), perm, iperm)
    assert f"  Nonzeros: {float(maxlnz):6.3e} \tOperation Count: {float(opc):6.3e}" in out


def test_wrong_argument_count_prints_usage(capsys):
    assert main(["only-one"]) == 0
    assert "Usage:" in capsys.readouterr().out


def test_missing_graph_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.graph"), str(tmp_path / "perm")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_short_perm_file(tmp_path, path_graph, capsys):
    perm_path = write_perm(tmp_path, [0, 1])
    assert main([str(path_graph), str(perm_path)]) == 1
    assert "Premature end" in capsys.readouterr().err


def test_non_permutation_rejected(tmp_path, path_graph, capsys):
    perm_path = write_perm(tmp_path, [0, 0, 1])
    assert main([str(path_graph), str(perm_path)]) == 1
    assert "permutation" in capsys.readouterr().err


def test_multi_constraint_graph_refused(tmp_path, capsys):
    graph_path = tmp_path / "mc.graph"
    graph_path.write_text("2 1 10 2\n1 1 2\n1 1 1\n")
    perm_path = write_perm(tmp_path, [0, 1])
    assert main([str(graph_path), str(perm_path)]) == 0
    assert "one constraint" in capsys.readouterr().out