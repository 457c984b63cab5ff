"""A simple append-only list of outgoing (vertex, label) edges."""

from __future__ import annotations

from typing import Iterator


class EdgeList:
    """Ordered collection of outgoing edges, each a (vertex id, label) pair."""

    def __init__(self) -> None:
        self._edges: list[tuple[int, int]] = []

    def add_edge(self, vid: int, label: int) -> None:
        """Append an edge to the end of the list."""
        self._edges.append((vid, label))

    def has_adjacent_duplicate(self) -> bool:
        """Return True if two consecutive edges are identical."""
        return any(a == b for a, b in zip(self._edges, self._edges[1:]))

    def clear(self) -> None:
        self._edges.clear()

    def describe(self) -> str:
        """Human-readable rendering of the list."""
        if not self._edges:
            return "empty EdgeList!"
        body = "".join(f"({vid},{label}) -> " for vid, label in self._edges)
        return f"EdgeList: \n{body}end"

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self._edges)