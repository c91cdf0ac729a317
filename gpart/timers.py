"""CPU timers for the phases of a multilevel run."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

Clock = Callable[[], float]


@dataclass
class Timer:
    """Accumulating timer driven by ``clock`` (CPU time by default)."""

    clock: Clock = time.process_time
    _total: float = field(default=0.0, init=False, repr=False)
    _started: Optional[float] = field(default=None, init=False, repr=False)

    def start(self) -> None:
        """Begin a timed interval."""
        if self._started is not None:
            raise RuntimeError("timer is already running")
        self._started = self.clock()

    def stop(self) -> None:
        """End the current interval and add it to the total."""
        if self._started is None:
            raise RuntimeError("timer is not running")
        self._total += self.clock() - self._started
        self._started = None

    def clear(self) -> None:
        """Reset the total to zero and stop the timer."""
        self._total = 0.0
        self._started = None

    def elapsed(self) -> float:
        """Seconds accumulated, including a running interval."""
        if self._started is None:
            return self._total
        return self._total + self.clock() - self._started


_TIMER_NAMES = (
    "total",
    "init_part",
    "match",
    "contract",
    "coarsen",
    "uncoarsen",
    "refine",
    "project",
    "split",
    "aux1",
    "aux2",
    "aux3",
)

_REPORT_LINES = (
    (" Multilevel: \t\t", "total"),
    ("     Coarsening: \t\t", "coarsen"),
    ("            Matching: \t\t\t", "match"),
    ("            Contract: \t\t\t", "contract"),
    ("     Initial Partition: \t", "init_part"),
    ("     Uncoarsening: \t\t", "uncoarsen"),
    ("          Refinement: \t\t\t", "refine"),
    ("          Projection: \t\t\t", "project"),
    ("     Splitting: \t\t", "split"),
)


@dataclass
class TimerSet:
    """The timers kept for one partitioning or ordering run."""

    clock: Clock = time.process_time
    total: Timer = field(init=False)
    init_part: Timer = field(init=False)
    match: Timer = field(init=False)
    contract: Timer = field(init=False)
    coarsen: Timer = field(init=False)
    uncoarsen: Timer = field(init=False)
    refine: Timer = field(init=False)
    project: Timer = field(init=False)
    split: Timer = field(init=False)
    aux1: Timer = field(init=False)
    aux2: Timer = field(init=False)
    aux3: Timer = field(init=False)

    def __post_init__(self) -> None:
        for name in _TIMER_NAMES:
            setattr(self, name, Timer(self.clock))

    def clear_all(self) -> None:
        """Reset every timer."""
        for name in _TIMER_NAMES:
            getattr(self, name).clear()

    def report(self) -> str:
        """Return the timing summary as printed after a run."""
        parts = ["\nTiming Information -------------------------------------------------"]
        for label, name in _REPORT_LINES:
            parts.append(f"\n{label} {getattr(self, name).elapsed():7.3f}")
        parts.append("\n********************************************************************\n")
        return "".join(parts)