"""Small numeric helpers, the random seed and result status codes."""

from __future__ import annotations

import random
import signal
from enum import IntEnum
from typing import Sequence

SIGMEM = int(signal.SIGABRT)
SIGERR = int(signal.SIGTERM)

DEFAULT_SEED = 4321


class Status(IntEnum):
    """Result of a partitioning call."""

    OK = 1
    ERROR_INPUT = -2
    ERROR_MEMORY = -3
    ERROR = -4


def status_from_signal(code: int) -> Status:
    """Map a signal code raised during work to a result status."""
    if code == 0:
        return Status.OK
    if code == SIGMEM:
        return Status.ERROR_MEMORY
    return Status.ERROR


def init_random(seed: int) -> random.Random:
    """Return a generator seeded with ``seed``, or the default seed for -1."""
    return random.Random(DEFAULT_SEED if seed == -1 else seed)


def _check_pair(x: Sequence, y: Sequence, minimum: int) -> None:
    if len(x) != len(y):
        raise ValueError("x and y must have the same length")
    if len(x) < minimum:
        raise ValueError(f"at least {minimum} element(s) are required")


def argmax_nrm(x: Sequence[int], y: Sequence[float]) -> int:
    """Index of the largest ``x[i]*y[i]``; the first one on ties."""
    _check_pair(x, y, 1)
    best = 0
    for i, (xi, yi) in enumerate(zip(x, y)):
        if xi * yi > x[best] * y[best]:
            best = i
    return best


def argmax_strided(x: Sequence[int], n: int, stride: int) -> int:
    """Index among ``x[0], x[stride], ..., x[(n-1)*stride]`` of the largest one."""
    if n < 1:
        raise ValueError("n must be at least 1")
    if stride < 1:
        raise ValueError("stride must be at least 1")
    if (n - 1) * stride >= len(x):
        raise ValueError("x is too short for n and stride")
    values = x[: (n - 1) * stride + 1 : stride]
    best = 0
    for i, value in enumerate(values):
        if value > values[best]:
            best = i
    return best


def _second_best(values: Sequence[float]) -> int:
    if values[0] > values[1]:
        max1, max2 = 0, 1
    else:
        max1, max2 = 1, 0
    for i in range(2, len(values)):
        if values[i] > values[max1]:
            max2, max1 = max1, i
        elif values[i] > values[max2]:
            max2 = i
    return max2


def argmax2(x: Sequence[float]) -> int:
    """Index of the second largest element."""
    if len(x) < 2:
        raise ValueError("at least 2 elements are required")
    return _second_best(x)


def argmax2_nrm(x: Sequence[int], y: Sequence[float]) -> int:
    """Index of the second largest ``x[i]*y[i]``."""
    _check_pair(x, y, 2)
    return _second_best([xi * yi for xi, yi in zip(x, y)])