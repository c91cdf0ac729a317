# gpart

Tools for sparse graphs and finite-element meshes in the plain-text
formats used by multilevel graph partitioners: reading and writing
graphs, meshes, partition vectors and orderings; refining vertex
separators of a bisection with Fiduccia–Mattheyses style moves; and
measuring the fill-in that a fill-reducing ordering produces.

The package needs only the Python standard library and supports
Python 3.10 and later.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

### `gpart-cmpfillin`

Reads a graph file and an ordering file (one zero-based position per
line, one line per vertex) and prints the number of nonzeros in the
Cholesky factor and the operation count under that ordering.

```
gpart-cmpfillin mygraph.graph mygraph.graph.iperm
```

With a wrong number of arguments it prints a usage line. An empty graph
or one with more than one weight constraint is reported and nothing is
computed. Unreadable or malformed files, or an ordering file that does
not hold a permutation, print the error to standard error and exit
with status 1.

## File formats

**Graph files.** Lines starting with `%` are comments. The first
non-comment line holds the number of vertices, the number of edges
(each undirected edge counted once), and optionally a format code of up
to three digits and the number of weight constraints. The digits of the
format code say, in order, whether each vertex line starts with a vertex
size, whether it carries vertex weights, and whether each neighbour is
followed by an edge weight. Each following line lists the one-based
neighbours of one vertex.

```
% a 4-cycle
4 4
2 4
1 3
2 4
1 3
```

**Mesh files.** The first line gives the number of elements and
optionally the number of element-weight constraints; each element line
lists those weights, then its one-based node numbers.

**Target partition weights.** Lines of the form
`from[-to][:fromcnum[-tocnum]]=weight` give a fraction to a range of
partitions and constraints. Partitions left unspecified share what
remains of 1.0; a constraint specified for every partition is rescaled
to sum to 1.

## Library use

```python
from gpart.io import read_graph, read_po_vector
from gpart.fillin import compute_fill_in

graph = read_graph("mygraph.graph")
iperm = read_po_vector("mygraph.graph.iperm", graph.nvtxs)
perm = [0] * len(iperm)
for vertex, position in enumerate(iperm):
    perm[position] = vertex

nonzeros, opcount = compute_fill_in(graph, perm, iperm)
```

A missing input file raises `FileNotFoundError`; malformed input raises
`gpart.io.GraphFormatError` with a message naming the offending line,
vertex or edge.

### Modules

- `gpart.io` – `read_graph`, `read_mesh`, `read_tpwgts`,
  `read_po_vector`, and the writers `write_partition`
  (`<name>.part.<nparts>`), `write_mesh_partition`
  (`<name>.epart.<nparts>` and `<name>.npart.<nparts>`),
  `write_permutation` (`<name>.iperm`) and `write_graph`. The vector
  writers return the paths they wrote.
- `gpart.graph` – the `Graph` (CSR adjacency, with `neighbors` and
  `edge_weights`) and `Mesh` (with `element_nodes`) containers.
- `gpart.fillin` – `symbolic_factorization`, which returns a
  `SymbolicFactor` or raises `SubscriptOverflow`, and
  `compute_fill_in`.
- `gpart.nodepart` – `BoundaryList`, `NodePartition`,
  `compute_node_partition_params` and `project_node_partition` for
  three-way (left, right, separator) vertex labellings.
- `gpart.nodefm` – `refine_two_sided`, `refine_one_sided`,
  `balance_node_partition` and `refine_node_levels`, steered by a
  `RefineControl` (imbalance factor, refinement type, iterations,
  random seed).
- `gpart.pqueue` – `MaxPriorityQueue`, an addressable max-heap with
  `insert`, `delete`, `update`, `pop_top` and `see_top`.
- `gpart.balance` – `partition_balance` and `element_balance`.
- `gpart.options` – the `PType`, `ObjType`, `CType`, `IPType`,
  `RType` and `GType` enums, the `Params` record, `CommandLineError`,
  `HelpRequested` and `parse_long_only`, a parser for single-dash long
  options that accepts unique prefixes.
- `gpart.cmd_m2g` – `parse_m2gmetis_args`, which turns the arguments
  of a mesh-to-graph conversion (`-gtype`, `-ncommon`, `-dbglvl`,
  `-help`, then mesh file and output graph file) into `Params`.
- `gpart.timers` – `Timer` and `TimerSet`, CPU timers with a printed
  summary.
- `gpart.workspace` – `NeighborPool`, a growable pool of slots.
- `gpart.util` – `Status`, `status_from_signal`, `init_random` and the
  argmax helpers `argmax_nrm`, `argmax_strided`, `argmax2` and
  `argmax2_nrm`.

## What the package does not do

The package does not compute partitionings or fill-reducing orderings
itself: there is no coarsening, initial partitioning, k-way refinement
or nested dissection, and no command that partitions a graph or mesh or
writes an ordering. It also does not convert meshes to dual or nodal
graphs; `gpart.cmd_m2g` only parses the arguments for such a run. Its
only command is `gpart-cmpfillin`, which evaluates an ordering computed
elsewhere.