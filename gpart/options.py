"""Option enumerations, run parameters and a long-only option parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Mapping, Optional


class _Labelled(IntEnum):
    """Integer enumeration whose members have a short text label."""

    @property
    def label(self) -> str:
        return self.name.lower()


class PType(_Labelled):
    """Partitioning scheme."""

    RB = 0
    KWAY = 1


class ObjType(_Labelled):
    """Objective that partitioning optimises."""

    CUT = 0
    VOL = 1
    NODE = 2


class CType(_Labelled):
    """Matching scheme used during coarsening."""

    RM = 0
    SHEM = 1


class IPType(_Labelled):
    """Initial partitioning scheme."""

    GROW = 0
    RANDOM = 1
    EDGE = 2
    NODE = 3
    METISRB = 4


class RType(_Labelled):
    """Refinement scheme."""

    FM = 0
    GREEDY = 1
    SEP2SIDED = 2
    SEP1SIDED = 3

    @property
    def label(self) -> str:
        return _RTYPE_LABELS[self]


_RTYPE_LABELS = {
    RType.FM: "fm",
    RType.GREEDY: "greedy",
    RType.SEP2SIDED: "2sided",
    RType.SEP1SIDED: "1sided",
}


class GType(_Labelled):
    """Graph built from a mesh."""

    DUAL = 0
    NODAL = 1


@dataclass
class Params:
    """Run parameters gathered from the command line."""

    ptype: Optional[PType] = None
    objtype: Optional[ObjType] = None
    ctype: Optional[CType] = None
    iptype: Optional[IPType] = None
    rtype: Optional[RType] = None

    no2hop: bool = False
    minconn: bool = False
    contig: bool = False
    ondisk: bool = False
    dropedges: bool = False
    nooutput: bool = False
    balance: bool = False

    ncuts: int = 0
    niter: int = 0
    niparts: int = 0

    gtype: Optional[GType] = None
    ncommon: int = 0

    seed: int = 0
    dbglvl: int = 0

    nparts: int = 0

    nseps: int = 0
    ufactor: int = 0
    pfactor: int = 0
    compress: bool = False
    ccorder: bool = False

    filename: Optional[str] = None
    outfile: Optional[str] = None
    xyzfile: Optional[str] = None
    tpwgtsfile: Optional[str] = None
    ubvecstr: Optional[str] = None

    wgtflag: int = 0
    numflag: int = 0
    tpwgts: Optional[list[float]] = None
    ubvec: Optional[list[float]] = None


class CommandLineError(ValueError):
    """The command line holds an illegal option or value."""


class HelpRequested(Exception):
    """Usage text is to be shown and the program is to end normally."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text


def _resolve(name: str, specs: Mapping[str, bool], arg: str) -> str:
    if not name:
        raise CommandLineError(f"unrecognized option '{arg}'")
    if name in specs:
        return name
    candidates = [full for full in specs if full.startswith(name)]
    if not candidates:
        raise CommandLineError(f"unrecognized option '{arg}'")
    if len(candidates) > 1:
        raise CommandLineError(
            f"option '{arg}' is ambiguous; possibilities: "
            + " ".join(f"-{c}" for c in candidates)
        )
    return candidates[0]


def parse_long_only(argv, specs: Mapping[str, bool]) -> Iterator[tuple[Optional[str], str | None]]:
    """Yield ``(name, value)`` pairs for the options in ``argv``.

    ``specs`` maps each option name to whether it takes an argument.
    Options start with ``-`` or ``--``, may be abbreviated to a unique
    prefix and take their argument either after ``=`` or as the next word.
    Positional arguments are yielded as ``(None, arg)``; everything after
    ``--`` is positional.
    """
    args = list(argv)
    position = 0
    while position < len(args):
        arg = args[position]
        position += 1
        if arg == "--":
            for rest in args[position:]:
                yield None, rest
            return
        if arg == "-" or not arg.startswith("-"):
            yield None, arg
            continue
        body = arg[2:] if arg.startswith("--") else arg[1:]
        name, sep, value = body.partition("=")
        full = _resolve(name, specs, arg)
        if specs[full]:
            if not sep:
                if position >= len(args):
                    raise CommandLineError(f"option '-{full}' requires an argument")
                value = args[position]
                position += 1
            yield full, value
        else:
            if sep:
                raise CommandLineError(f"option '-{full}' doesn't allow an argument")
            yield full, None