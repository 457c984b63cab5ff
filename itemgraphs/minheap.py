"""A binary min-heap of merge cursors keyed by (vertex, label)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass
class MinHeapNode:
    """One heap entry: a (vertex, label) key plus the list and position it came from."""

    key_v: int
    key_c: int
    i: int = 0
    j: int = 0

    @property
    def key(self) -> tuple[int, int]:
        return (self.key_v, self.key_c)


class MinHeap:
    """Min-heap over :class:`MinHeapNode` ordered by vertex id, then label."""

    def __init__(self, nodes: Iterable[MinHeapNode]) -> None:
        self._nodes = list(nodes)
        for i in range((len(self._nodes) - 1) // 2, -1, -1):
            self.heapify(i)

    def heapify(self, i: int) -> None:
        """Sift the node at position ``i`` down until the heap property holds."""
        nodes = self._nodes
        size = len(nodes)
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            smallest = i
            if left < size and nodes[left].key < nodes[smallest].key:
                smallest = left
            if right < size and nodes[right].key < nodes[smallest].key:
                smallest = right
            if smallest == i:
                return
            nodes[i], nodes[smallest] = nodes[smallest], nodes[i]
            i = smallest

    def get_min(self) -> MinHeapNode:
        """Return the smallest node without removing it."""
        if not self._nodes:
            raise IndexError("heap is empty")
        return self._nodes[0]

    def replace_min(self, node: MinHeapNode) -> None:
        """Replace the smallest node with ``node`` and restore the heap."""
        if not self._nodes:
            raise IndexError("heap is empty")
        self._nodes[0] = node
        self.heapify(0)