"""Addressable max-priority queue over integer nodes."""

from __future__ import annotations

from typing import Optional


class MaxPriorityQueue:
    """Binary max-heap of nodes keyed by numbers, with key updates and deletes."""

    def __init__(self, maxnodes: Optional[int] = None) -> None:
        self._maxnodes = maxnodes
        self._keys: list[float] = []
        self._nodes: list[int] = []
        self._locator: dict[int, int] = {}

    def _check_node(self, node: int) -> None:
        if self._maxnodes is not None and not 0 <= node < self._maxnodes:
            raise ValueError(f"node {node} is outside [0, {self._maxnodes})")

    def _place(self, i: int, key: float, node: int) -> None:
        self._keys[i] = key
        self._nodes[i] = node
        self._locator[node] = i

    def _sift_up(self, i: int, key: float, node: int) -> None:
        keys, nodes = self._keys, self._nodes
        while i > 0:
            j = (i - 1) >> 1
            if key > keys[j]:
                self._place(i, keys[j], nodes[j])
                i = j
            else:
                break
        self._place(i, key, node)

    def _sift_down(self, i: int, key: float, node: int) -> None:
        keys, nodes = self._keys, self._nodes
        n = len(keys)
        while (j := 2 * i + 1) < n:
            if keys[j] > key:
                if j + 1 < n and keys[j + 1] > keys[j]:
                    j += 1
            elif j + 1 < n and keys[j + 1] > key:
                j += 1
            else:
                break
            self._place(i, keys[j], nodes[j])
            i = j
        self._place(i, key, node)

    def insert(self, node: int, key: float) -> None:
        """Add ``node`` with priority ``key``."""
        self._check_node(node)
        if node in self._locator:
            raise ValueError(f"node {node} is already queued")
        self._keys.append(key)
        self._nodes.append(node)
        self._sift_up(len(self._keys) - 1, key, node)

    def delete(self, node: int) -> None:
        """Remove ``node`` from the queue."""
        try:
            i = self._locator.pop(node)
        except KeyError:
            raise KeyError(f"node {node} is not queued") from None
        last_key = self._keys.pop()
        last_node = self._nodes.pop()
        if i < len(self._keys):
            if last_key > self._keys[i]:
                self._sift_up(i, last_key, last_node)
            else:
                self._sift_down(i, last_key, last_node)

    def update(self, node: int, key: float) -> None:
        """Change the priority of a queued ``node`` to ``key``."""
        try:
            i = self._locator[node]
        except KeyError:
            raise KeyError(f"node {node} is not queued") from None
        if key > self._keys[i]:
            self._sift_up(i, key, node)
        else:
            self._sift_down(i, key, node)

    def pop_top(self) -> int:
        """Remove and return the node with the highest key."""
        if not self._keys:
            raise IndexError("pop from an empty priority queue")
        top = self._nodes[0]
        del self._locator[top]
        last_key = self._keys.pop()
        last_node = self._nodes.pop()
        if self._keys:
            self._sift_down(0, last_key, last_node)
        return top

    def see_top(self) -> Optional[int]:
        """Return the node with the highest key, or None when empty."""
        return self._nodes[0] if self._nodes else None

    def reset(self) -> None:
        """Empty the queue."""
        self._keys.clear()
        self._nodes.clear()
        self._locator.clear()

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, node: object) -> bool:
        return node in self._locator