"""Graphs split into an itemset-encoded part and a part of not-yet-indexed edges."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterable, Optional

from itemgraphs.itemset_graph import ItemsetGraph

EdgeMap = dict[int, list[tuple[int, int]]]


@dataclass
class HybridGraph:
    """An itemset graph plus a map ``src -> [(dst, label), ...]`` of extra edges."""

    itemset_graph: ItemsetGraph = field(default_factory=ItemsetGraph)
    pe_graph: EdgeMap = field(default_factory=dict)

    @classmethod
    def from_parts(cls, edge_ids: Iterable[int], pe_graph: EdgeMap) -> "HybridGraph":
        return cls(ItemsetGraph(tuple(edge_ids)), pe_graph)

    def _pe_empty(self) -> bool:
        return not any(self.pe_graph.values())

    def equals(self, other: Optional[ItemsetGraph]) -> bool:
        """True if this graph holds no extra edges and its itemset part equals ``other``."""
        if other is None:
            return False
        if not self._pe_empty():
            return False
        return self.itemset_graph.edge_ids == other.edge_ids

    def is_empty(self) -> bool:
        return self._pe_empty() and self.itemset_graph.is_empty()


@dataclass
class HybridGraphStore:
    """Thread-safe map from graph pointers to hybrid graphs."""

    graphs: dict[int, HybridGraph] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add_graph(self, pointer: int, graph: HybridGraph) -> None:
        """Store ``graph`` under ``pointer``, replacing any previous one."""
        with self._lock:
            self.graphs[pointer] = graph

    def clear(self) -> None:
        with self._lock:
            self.graphs.clear()

    def __len__(self) -> int:
        return len(self.graphs)