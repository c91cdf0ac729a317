"""Pool of neighbour-information slots used during k-way refinement."""

from __future__ import annotations

from typing import Any


class NeighborPool:
    """Hands out consecutive runs of slots from a growable pool.

    Each request is capped at ``nparts`` slots. When the pool runs out it
    grows by ``max(10*nnbrs, size/2)``, never beyond ``size_max``.
    """

    def __init__(self, nparts: int, size_max: int, size: int) -> None:
        if nparts < 1:
            raise ValueError("nparts must be at least 1")
        if size < 0 or size_max < 0:
            raise ValueError("pool sizes must not be negative")
        self.nparts = nparts
        self.size_max = size_max
        self.size = size
        self.cpos = 0
        self.reallocs = 0
        self.slots: list[Any] = [None] * size

    def reset(self) -> None:
        """Release every slot handed out so far."""
        self.cpos = 0

    def get_next(self, nnbrs: int) -> int:
        """Reserve room for ``nnbrs`` neighbours and return the first slot's index."""
        nnbrs = min(self.nparts, nnbrs)
        self.cpos += nnbrs

        if self.cpos > self.size:
            self.size += max(10 * nnbrs, self.size // 2)
            self.size = min(self.size, self.size_max)
            if len(self.slots) < self.size:
                self.slots.extend([None] * (self.size - len(self.slots)))
            else:
                del self.slots[self.size :]
            self.reallocs += 1

        return self.cpos - nnbrs