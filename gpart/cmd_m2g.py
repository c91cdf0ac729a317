"""Command-line parsing for the mesh-to-graph conversion command."""

from __future__ import annotations

import re
import sys
from typing import Iterator, Optional

from gpart.options import CommandLineError, GType, HelpRequested, Params, parse_long_only

_SPECS = {
    "gtype": True,
    "ncommon": True,
    "dbglvl": True,
    "help": False,
}

_GTYPES = {"dual": GType.DUAL, "nodal": GType.NODAL}

_HELP_LINES = (
    " ",
    "Usage: m2gmetis [options] <meshfile> <graphfile>",
    " ",
    " Required parameters",
    "    meshfile    Stores the input mesh.",
    "    graphfile   The filename of the output graph.",
    " ",
    " Optional parameters",
    "  -gtype=string",
    "     Specifies the graph that will be generated.",
    "     The possible values are:",
    "        dual     - Generate dual graph of the mesh [default]",
    "        nodal    - Generate the nodal graph of the mesh",
    " ",
    "  -ncommon=int [applies when gtype=dual]",
    "     Specifies the common number of nodes that two elements must have",
    "     in order to put an edge between them in the dual graph. Default is 1.",
    " ",
    "  -dbglvl=int      ",
    "     Selects the dbglvl.",
    " ",
    "  -help",
    "     Prints this message.",
)

_SHORT_HELP_LINES = (
    " ",
    "   Usage: m2gmetis [options] <meshfile> <graphfile>",
    "          use 'm2gmetis -help' for a summary of the options.",
)

HELP_TEXT = "".join(line + "\n" for line in _HELP_LINES)
MISSING_TEXT = "Missing parameters." + "".join(line + "\n" for line in _SHORT_HELP_LINES)

_ILLEGAL = "Illegal command-line option(s)\nUse m2gmetis -help for a summary of the options."

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _options(argv) -> Iterator[tuple[Optional[str], Optional[str]]]:
    try:
        yield from parse_long_only(argv, _SPECS)
    except CommandLineError as exc:
        raise CommandLineError(f"{exc}\n{_ILLEGAL}") from exc


def parse_m2gmetis_args(argv=None) -> Params:
    """Build run parameters from the conversion command's arguments.

    ``argv`` excludes the program name. Raises HelpRequested when usage
    text is to be shown and CommandLineError for illegal input.
    """
    if argv is None:
        argv = sys.argv[1:]

    params = Params(gtype=GType.DUAL, ncommon=1, dbglvl=0)

    positionals: list[str] = []
    for name, value in _options(argv):
        if name is None:
            positionals.append(value)
        elif name == "help":
            raise HelpRequested(HELP_TEXT)
        elif name == "gtype":
            gtype = _GTYPES.get(value)
            if gtype is None:
                raise CommandLineError(f"Invalid option -gtype={value}")
            params.gtype = gtype
        elif name == "ncommon":
            params.ncommon = _atoi(value)
            if params.ncommon < 1:
                raise CommandLineError("The -ncommon option should specify a number >= 1.")
        else:
            params.dbglvl = _atoi(value)

    if len(positionals) != 2:
        raise HelpRequested(MISSING_TEXT)

    params.filename, params.outfile = positionals
    return params