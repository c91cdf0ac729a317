"""Reading and writing graphs, meshes, weights and result vectors."""

from __future__ import annotations

import math
import os
import re
from typing import Iterable, Iterator, Optional, Sequence

from gpart.graph import Graph, Mesh


class GraphFormatError(ValueError):
    """An input file is malformed."""


_INT = re.compile(r"\s*([+-]?\d+)")
_REAL = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _strtol(text: str, pos: int) -> tuple[Optional[int], int]:
    match = _INT.match(text, pos)
    if match is None:
        return None, pos
    return int(match.group(1)), match.end()


def _strtod(text: str, pos: int) -> tuple[Optional[float], int]:
    match = _REAL.match(text, pos)
    if match is None:
        return None, pos
    return float(match.group(1)), match.end()


def _scan_ints(text: str, limit: int) -> list[int]:
    values: list[int] = []
    pos = 0
    while len(values) < limit:
        value, pos = _strtol(text, pos)
        if value is None:
            break
        values.append(value)
    return values


def _data_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        if not line.startswith("%"):
            yield line


def _require_file(path: str, message: str) -> None:
    if not os.path.isfile(path):
        raise FileNotFoundError(message)


def read_graph(path) -> Graph:
    """Read a graph file: header ``nvtxs nedges [fmt [ncon]]`` then one line per vertex."""
    path = os.fspath(path)
    _require_file(path, f"File {path} does not exist!")

    with open(path) as handle:
        lines = _data_lines(handle)
        header = next(lines, None)
        if header is None:
            raise GraphFormatError(f"Premature end of input file: file: {path}")

        fields = _scan_ints(header, 4)
        if len(fields) < 2:
            raise GraphFormatError(
                "The input file does not specify the number of vertices and edges."
            )
        nvtxs, nedges = fields[0], fields[1]
        fmt = fields[2] if len(fields) > 2 else 0
        ncon = fields[3] if len(fields) > 3 else 0

        if nvtxs <= 0 or nedges <= 0:
            raise GraphFormatError(
                f"The supplied nvtxs:{nvtxs} and nedges:{nedges} must be positive."
            )
        if fmt > 111:
            raise GraphFormatError(f"Cannot read this type of file format [fmt={fmt}]!")

        fmtstr = f"{int(math.fmod(fmt, 1000)):03d}"
        readvs = fmtstr[0] == "1"
        readvw = fmtstr[1] == "1"
        readew = fmtstr[2] == "1"

        if ncon > 0 and not readvw:
            raise GraphFormatError(
                f"You specified ncon={ncon}, but the fmt parameter does not specify "
                "vertex weights. Make sure that the fmt parameter is set to either 10 or 11."
            )

        nedges *= 2
        ncon = ncon or 1

        xadj = [0]
        adjncy: list[int] = []
        vwgt = [1] * (ncon * nvtxs)
        adjwgt: Optional[list[int]] = [] if readew else None
        vsize = [1] * nvtxs

        for i in range(nvtxs):
            line = next(lines, None)
            if line is None:
                raise GraphFormatError(
                    f"Premature end of input file while reading vertex {i + 1}."
                )
            pos = 0

            if readvs:
                value, pos = _strtol(line, pos)
                if value is None:
                    raise GraphFormatError(
                        f"The line for vertex {i + 1} does not have vsize information"
                    )
                if value < 0:
                    raise GraphFormatError(f"The size for vertex {i + 1} must be >= 0")
                vsize[i] = value

            if readvw:
                for l in range(ncon):
                    value, pos = _strtol(line, pos)
                    if value is None:
                        raise GraphFormatError(
                            f"The line for vertex {i + 1} does not have enough weights "
                            f"for the {ncon} constraints."
                        )
                    if value < 0:
                        raise GraphFormatError(
                            f"The weight vertex {i + 1} and constraint {l} must be >= 0"
                        )
                    vwgt[i * ncon + l] = value

            while True:
                edge, pos = _strtol(line, pos)
                if edge is None:
                    break
                if edge < 1 or edge > nvtxs:
                    raise GraphFormatError(
                        f"Edge {edge} for vertex {i + 1} is out of bounds"
                    )
                ewgt = 1
                if readew:
                    weight, pos = _strtol(line, pos)
                    if weight is None:
                        raise GraphFormatError(f"Premature end of line for vertex {i + 1}")
                    if weight <= 0:
                        raise GraphFormatError(
                            f"The weight ({weight}) for edge ({i + 1}, {edge}) must be positive."
                        )
                    ewgt = weight
                if len(adjncy) == nedges:
                    raise GraphFormatError(
                        f"There are more edges in the file than the {nedges // 2} specified."
                    )
                adjncy.append(edge - 1)
                if adjwgt is not None:
                    adjwgt.append(ewgt)
            xadj.append(len(adjncy))

    found = len(adjncy)
    if found != nedges:
        message = (
            "In the first line of the file, you specified that the graph contained\n"
            f"{nedges // 2} edges. However, I only found {found // 2} edges in the file.\n"
        )
        if 2 * found == nedges:
            message += (
                "I detected that you specified twice the number of edges that you have "
                "in the file. Remember that the number of edges specified in the first "
                "line counts each edge between vertices v and u only once.\n"
            )
        message += "Please specify the correct number of edges in the first line of the file."
        raise GraphFormatError(message)

    return Graph(xadj, adjncy, ncon=ncon, vwgt=vwgt, adjwgt=adjwgt, vsize=vsize)


def read_mesh(path) -> Mesh:
    """Read a mesh file: header ``ne [ncon]`` then one line of 1-based nodes per element."""
    path = os.fspath(path)
    _require_file(path, f"File {path} does not exist!")

    with open(path) as handle:
        all_lines = handle.read().splitlines(keepends=True)
    nlines = len(all_lines)
    lines = _data_lines(all_lines)

    header = next(lines, None)
    if header is None:
        raise GraphFormatError(f"Premature end of input file: file: {path}")

    fields = _scan_ints(header, 2)
    if len(fields) < 1:
        raise GraphFormatError("The input file does not specify the number of elements.")
    ne = fields[0]
    ncon = fields[1] if len(fields) > 1 else 0

    if ne <= 0:
        raise GraphFormatError(f"The supplied number of elements:{ne} must be positive.")
    if ne > nlines:
        raise GraphFormatError(
            f"The file has {nlines} lines which smaller than the number of "
            f"elements of {ne} specified in the header line."
        )

    eptr = [0]
    eind: list[int] = []
    ewgt = [1] * (max(ncon, 1) * ne)

    for i in range(ne):
        line = next(lines, None)
        if line is None:
            raise GraphFormatError(
                f"Premature end of input file while reading element {i + 1}."
            )
        pos = 0
        for l in range(ncon):
            value, pos = _strtol(line, pos)
            if value is None:
                raise GraphFormatError(
                    f"The line for element {i + 1} does not have enough weights "
                    f"for the {ncon} constraints."
                )
            if value < 0:
                raise GraphFormatError(
                    f"The weight for element {i + 1} and constraint {l} must be >= 0"
                )
            ewgt[i * ncon + l] = value

        while True:
            node, pos = _strtol(line, pos)
            if node is None:
                break
            if node < 1:
                raise GraphFormatError(f"Node {node} for element {i + 1} is out of bounds")
            eind.append(node - 1)
        eptr.append(len(eind))

    return Mesh(eptr, eind, ewgt=ewgt, ncon=max(ncon, 1))


def read_tpwgts(path, nparts: int, ncon: int) -> list[float]:
    """Target partition weights, ``nparts*ncon`` of them, partition-major.

    Without a file every partition gets ``1/nparts``. Lines of the file read
    ``from[-to][:fromcnum[-tocnum]]=wgt``; unspecified entries share what is
    left of 1.0, and fully specified constraints are rescaled to sum to 1.
    """
    if path is None:
        return [1.0 / nparts] * (nparts * ncon)

    path = os.fspath(path)
    _require_file(path, f"Graph file {path} does not exist!")

    tpwgts = [-1.0] * (nparts * ncon)

    with open(path) as handle:
        for raw in handle:
            line = raw.replace(" ", "")
            shown = line.rstrip("\n")

            frm, pos = _strtol(line, 0)
            if frm is None:
                raise GraphFormatError(
                    f"The 'from' component of line <{shown}> in the tpwgts file is incorrect."
                )

            if line[pos : pos + 1] == "-":
                to, pos = _strtol(line, pos + 1)
                if to is None:
                    raise GraphFormatError(
                        f"The 'to' component of line <{shown}> in the tpwgts file is incorrect."
                    )
            else:
                to = frm

            if line[pos : pos + 1] == ":":
                fromcnum, pos = _strtol(line, pos + 1)
                if fromcnum is None:
                    raise GraphFormatError(
                        f"The 'fromcnum' component of line <{shown}> in the tpwgts file "
                        "is incorrect."
                    )
                if line[pos : pos + 1] == "-":
                    tocnum, pos = _strtol(line, pos + 1)
                    if tocnum is None:
                        raise GraphFormatError(
                            f"The 'tocnum' component of line <{shown}> in the tpwgts file "
                            "is incorrect."
                        )
                else:
                    tocnum = fromcnum
            else:
                fromcnum, tocnum = 0, ncon - 1

            if line[pos : pos + 1] != "=":
                raise GraphFormatError(
                    f"The 'wgt' component of line <{shown}> in the tpwgts file is missing."
                )
            awgt, pos = _strtod(line, pos + 1)
            if awgt is None:
                raise GraphFormatError(
                    f"The 'wgt' component of line <{shown}> in the tpwgts file is incorrect."
                )

            if frm < 0 or to < 0 or frm >= nparts or to >= nparts:
                raise GraphFormatError(f"Invalid partition range for {frm}:{to}")
            if fromcnum < 0 or tocnum < 0 or fromcnum >= ncon or tocnum >= ncon:
                raise GraphFormatError(
                    f"Invalid constraint number range for {fromcnum}:{tocnum}"
                )
            if awgt <= 0.0 or awgt >= 1.0:
                raise GraphFormatError(f"Invalid partition weight of {awgt}")

            for i in range(frm, to + 1):
                for j in range(fromcnum, tocnum + 1):
                    tpwgts[i * ncon + j] = awgt

    for j in range(ncon):
        column = tpwgts[j::ncon]
        specified = [w for w in column if w > 0]
        twgt = sum(specified)
        nleft = nparts - len(specified)

        if nleft == 0:
            for i in range(nparts):
                tpwgts[i * ncon + j] *= 1.0 / twgt
        else:
            if twgt > 1:
                raise GraphFormatError(
                    f"The total specified target partition weights for constraint #{j} "
                    f"of {twgt} exceeds 1.0."
                )
            share = (1.0 - twgt) / nleft
            for i in range(nparts):
                if tpwgts[i * ncon + j] < 0:
                    tpwgts[i * ncon + j] = share

    return tpwgts


def read_po_vector(path, n: int) -> list[int]:
    """Read ``n`` whitespace-separated integers (a partition or ordering)."""
    path = os.fspath(path)
    with open(path) as handle:
        text = handle.read()
    values: list[int] = []
    pos = 0
    for i in range(n):
        value, pos = _strtol(text, pos)
        if value is None:
            raise GraphFormatError(
                f"Premature end of file {path} at line {i} [nvtxs: {n}]"
            )
        values.append(value)
    return values


def _write_vector(path: str, values: Sequence[int]) -> None:
    with open(path, "w") as handle:
        handle.writelines(f"{value}\n" for value in values)


def write_partition(fname, part: Sequence[int], nparts: int) -> str:
    """Write ``part`` to ``<fname>.part.<nparts>`` and return that path."""
    path = f"{os.fspath(fname)}.part.{nparts}"
    _write_vector(path, part)
    return path


def write_mesh_partition(
    fname, nparts: int, epart: Sequence[int], npart: Sequence[int]
) -> tuple[str, str]:
    """Write element and node partitions to ``.epart.<n>`` and ``.npart.<n>`` files."""
    base = os.fspath(fname)
    epath = f"{base}.epart.{nparts}"
    npath = f"{base}.npart.{nparts}"
    _write_vector(epath, epart)
    _write_vector(npath, npart)
    return epath, npath


def write_permutation(fname, iperm: Sequence[int]) -> str:
    """Write ``iperm`` to ``<fname>.iperm`` and return that path."""
    path = f"{os.fspath(fname)}.iperm"
    _write_vector(path, iperm)
    return path


def write_graph(graph: Graph, path) -> None:
    """Write ``graph`` in the graph file format, listing only non-unit weights."""
    nvtxs, ncon = graph.nvtxs, graph.ncon
    xadj, adjncy = graph.xadj, graph.adjncy
    vwgt, vsize, adjwgt = graph.vwgt, graph.vsize, graph.adjwgt

    hasvwgt = vwgt is not None and any(w != 1 for w in vwgt[: nvtxs * ncon])
    hasvsize = vsize is not None and any(s != 1 for s in vsize[:nvtxs])
    hasewgt = adjwgt is not None and any(w != 1 for w in adjwgt[: xadj[nvtxs]])

    parts = [f"{nvtxs} {xadj[nvtxs] // 2}"]
    if hasvwgt or hasvsize or hasewgt:
        parts.append(f" {int(hasvsize)}{int(hasvwgt)}{int(hasewgt)}")
        if hasvwgt:
            parts.append(f" {ncon}")

    for i in range(nvtxs):
        parts.append("\n")
        if hasvsize:
            parts.append(f" {vsize[i]}")
        if hasvwgt:
            parts.extend(f" {w}" for w in vwgt[i * ncon : (i + 1) * ncon])
        for j in range(xadj[i], xadj[i + 1]):
            parts.append(f" {adjncy[j] + 1}")
            if hasewgt:
                parts.append(f" {adjwgt[j]}")

    with open(os.fspath(path), "w") as handle:
        handle.write("".join(parts))