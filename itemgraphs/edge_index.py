"""Interning of edges to dense integer ids and graph conversions built on it."""

from __future__ import annotations

import threading
from typing import Iterable, Mapping, Optional, Sequence

from itemgraphs.compression import compress_edges
from itemgraphs.edge import Edge
from itemgraphs.hybrid import EdgeMap, HybridGraph
from itemgraphs.itemset_graph import ItemsetGraph

GraphLike = Mapping[int, Sequence[tuple[int, int]]]


def _iter_edges(graph: GraphLike) -> Iterable[Edge]:
    for src, targets in graph.items():
        for dst, label in targets:
            yield Edge(src, dst, label)


class EdgeIndex:
    """Two-way table between edges and the consecutive ids assigned to them."""

    def __init__(self) -> None:
        self._edges: list[Edge] = []
        self._ids: dict[Edge, int] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_tables(cls, edges: Iterable[Edge], ids: Mapping[Edge, int]) -> "EdgeIndex":
        """Rebuild an index from a saved id-to-edge list and edge-to-id map."""
        index = cls()
        index._edges = list(edges)
        index._ids = dict(ids)
        return index

    @property
    def edges(self) -> tuple[Edge, ...]:
        """Edges in id order."""
        return tuple(self._edges)

    def ids(self) -> dict[Edge, int]:
        """A copy of the edge-to-id map."""
        return dict(self._ids)

    def intern(self, edge: Edge) -> int:
        """Id of ``edge``, assigning the next free id if it is new."""
        with self._lock:
            existing = self._ids.get(edge)
            if existing is not None:
                return existing
            self._edges.append(edge)
            new_id = len(self._edges) - 1
            self._ids[edge] = new_id
            return new_id

    def lookup(self, edge: Edge) -> Optional[int]:
        """Id of ``edge``, or None if it has never been interned."""
        return self._ids.get(edge)

    def edge(self, edge_id: int) -> Edge:
        """The edge with id ``edge_id``."""
        if edge_id < 0 or edge_id >= len(self._edges):
            raise IndexError(f"unknown edge id {edge_id}")
        return self._edges[edge_id]

    def to_itemset_graph(
        self, graph: GraphLike, itemsets: Sequence[ItemsetGraph]
    ) -> ItemsetGraph:
        """Encode ``graph`` as sorted edge ids, interning new edges, then compress."""
        ids = sorted(self.intern(e) for e in _iter_edges(graph))
        return ItemsetGraph(compress_edges(ids, itemsets))

    def to_itemset_graph_hybrid(
        self, hybrid: HybridGraph, itemsets: Sequence[ItemsetGraph]
    ) -> ItemsetGraph:
        """Merge a hybrid graph's itemset part and extra edges into one itemset graph."""
        ids = list(hybrid.itemset_graph.edge_ids)
        ids.extend(self.intern(e) for e in _iter_edges(hybrid.pe_graph))
        ids.sort()
        return ItemsetGraph(compress_edges(ids, itemsets))

    def to_edge_map(
        self, itemset_graph: ItemsetGraph, itemsets: Sequence[ItemsetGraph]
    ) -> EdgeMap:
        """Decode an itemset graph into ``src -> sorted [(dst, label), ...]``."""
        result: EdgeMap = {}
        for edge_id in itemset_graph.expand(itemsets):
            e = self.edge(edge_id)
            result.setdefault(e.src, []).append((e.dst, e.label))
        for targets in result.values():
            targets.sort()
        return result

    def to_hybrid_graph(
        self, graph: GraphLike, itemsets: Sequence[ItemsetGraph]
    ) -> HybridGraph:
        """Split ``graph`` into indexed edges (compressed) and not-yet-indexed ones."""
        ids: list[int] = []
        extra: EdgeMap = {}
        for src, targets in graph.items():
            unknown: list[tuple[int, int]] = []
            for dst, label in targets:
                edge_id = self._ids.get(Edge(src, dst, label))
                if edge_id is None:
                    unknown.append((dst, label))
                else:
                    ids.append(edge_id)
            if unknown:
                extra[src] = unknown
        ids.sort()
        return HybridGraph.from_parts(compress_edges(ids, itemsets), extra)

    def construct_hybrid_graph(
        self,
        out: GraphLike,
        old_out: GraphLike,
        old_itemset: ItemsetGraph,
        itemsets: Sequence[ItemsetGraph],
    ) -> HybridGraph:
        """Build the hybrid graph of ``out`` from the difference to ``old_out``.

        ``old_itemset`` is the encoding of ``old_out``; added indexed edges are
        merged into it, deleted ones removed, and added edges that are not yet
        indexed are kept aside.  Raises ValueError if an added edge id is
        already present in ``old_itemset``.
        """
        added_ids: list[int] = []
        deleted_ids: list[int] = []
        extra: EdgeMap = {}

        def add(src: int, dst: int, label: int, unknown: list[tuple[int, int]]) -> None:
            edge_id = self._ids.get(Edge(src, dst, label))
            if edge_id is None:
                unknown.append((dst, label))
            else:
                added_ids.append(edge_id)

        def delete(src: int, dst: int, label: int) -> None:
            edge_id = self._ids.get(Edge(src, dst, label))
            if edge_id is not None:
                deleted_ids.append(edge_id)

        for src in sorted(set(out) | set(old_out)):
            new_targets = sorted(out.get(src, ()))
            old_targets = sorted(old_out.get(src, ()))
            unknown: list[tuple[int, int]] = []
            if src not in old_out:
                for dst, label in new_targets:
                    add(src, dst, label, unknown)
            elif src not in out:
                for dst, label in old_targets:
                    delete(src, dst, label)
            else:
                old_set = set(old_targets)
                new_set = set(new_targets)
                for dst, label in new_targets:
                    if (dst, label) not in old_set:
                        add(src, dst, label, unknown)
                for dst, label in old_targets:
                    if (dst, label) not in new_set:
                        delete(src, dst, label)
            if unknown:
                extra[src] = unknown

        old_ids = old_itemset.edge_ids
        if set(added_ids) & set(old_ids):
            raise ValueError("added edge already present in the old itemset graph")
        removed = set(deleted_ids)
        merged = sorted(added_ids + [e for e in old_ids if e not in removed])
        return HybridGraph.from_parts(compress_edges(merged, itemsets), extra)

    def __len__(self) -> int:
        return len(self._edges)