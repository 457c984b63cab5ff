"""A graph store that keeps every graph as an itemset-compressed set of edge ids."""

from __future__ import annotations

import logging
import os
import random
import subprocess
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Mapping, Optional, Sequence, Union

from itemgraphs.compression import (
    compress_edges,
    mine_fpgrowth_itemsets,
    parse_mining_output,
    select_itemsets,
)
from itemgraphs.edge_index import EdgeIndex, GraphLike
from itemgraphs.hybrid import EdgeMap, HybridGraph, HybridGraphStore
from itemgraphs.itemset_graph import ItemsetGraph

logger = logging.getLogger(__name__)

SAMPLE_PERCENT = 30
SAMPLE_LIMIT = 10000
SAMPLE_MIN_LENGTH = 10
TOP_K = 40


@dataclass
class StoreStatistics:
    """Counts gathered over the graphs of a store."""

    graphs: int = 0
    vertices: int = 0
    edges: int = 0
    graph_items: int = 0
    base_items: int = 0


def _workers() -> int:
    return max(1, os.cpu_count() or 1)


class ItemsetGraphStore:
    """Maps graph pointers to itemset graphs sharing one edge index and itemset table."""

    def __init__(self) -> None:
        self.edge_index = EdgeIndex()
        self.graphs: dict[int, ItemsetGraph] = {}
        self.itemsets: list[ItemsetGraph] = []
        self._lock = threading.Lock()

    def retrieve(self, pointer: int) -> Optional[EdgeMap]:
        """Decoded graph stored under ``pointer``, or None."""
        graph = self.graphs.get(pointer)
        if graph is None:
            return None
        return self.edge_index.to_edge_map(graph, self.itemsets)

    def retrieve_update(self, pointer: int) -> Optional[EdgeMap]:
        """Like :meth:`retrieve`, compressing the stored graph if it is not yet compressed."""
        graph = self.graphs.get(pointer)
        if graph is None:
            return None
        decoded = self.edge_index.to_edge_map(graph, self.itemsets)
        if not graph.is_compressed():
            graph.edge_ids = compress_edges(graph.edge_ids, self.itemsets)
        return decoded

    def retrieve_direct(self, pointer: int) -> Optional[ItemsetGraph]:
        """The stored itemset graph itself, or None."""
        return self.graphs.get(pointer)

    def update(self, pointer: int, graph: GraphLike) -> None:
        """Encode ``graph`` and store it under ``pointer``."""
        encoded = self.edge_index.to_itemset_graph(graph, self.itemsets)
        with self._lock:
            self.graphs[pointer] = encoded

    def update_hybrid(self, pointer: int, hybrid: HybridGraph) -> None:
        """Encode a hybrid graph and store it under ``pointer``."""
        encoded = self.edge_index.to_itemset_graph_hybrid(hybrid, self.itemsets)
        with self._lock:
            self.graphs[pointer] = encoded

    def update_graphs(self, graphs: Mapping[int, GraphLike], parallel: bool) -> None:
        """Store every graph of ``graphs``, using worker threads when ``parallel``."""
        if not parallel:
            for pointer, graph in graphs.items():
                self.update(pointer, graph)
            return
        with self._lock:
            for pointer in graphs:
                self.graphs.setdefault(pointer, ItemsetGraph())
        with ThreadPoolExecutor(max_workers=_workers()) as pool:
            list(pool.map(lambda item: self.update(*item), graphs.items()))

    def update_graphs_hybrid(self, store: HybridGraphStore, parallel: bool) -> None:
        """Store every hybrid graph of ``store``, using worker threads when ``parallel``."""
        items = list(store.graphs.items())
        if not parallel:
            for pointer, hybrid in items:
                self.update_hybrid(pointer, hybrid)
            return
        with self._lock:
            for pointer, _ in items:
                self.graphs.setdefault(pointer, ItemsetGraph())
        with ThreadPoolExecutor(max_workers=_workers()) as pool:
            list(pool.map(lambda item: self.update_hybrid(*item), items))

    def compress_graph(self, itemset_graph: ItemsetGraph) -> ItemsetGraph:
        """Compress ``itemset_graph`` in place unless it is empty or already compressed."""
        if not itemset_graph.is_empty() and itemset_graph.edge_ids[0] >= 0:
            itemset_graph.edge_ids = compress_edges(itemset_graph.edge_ids, self.itemsets)
        return itemset_graph

    def compress_graphs(self) -> None:
        """Compress every stored graph with the current itemset table."""
        graphs = [g for g in self.graphs.values() if not g.is_empty()]
        with ThreadPoolExecutor(max_workers=_workers()) as pool:
            list(pool.map(self.compress_graph, graphs))

    def construct_base_fpgrowth(self, support: int, length: int) -> list[ItemsetGraph]:
        """Mine itemsets with FP-growth over the stored graphs and add them to the table."""
        if not self.graphs:
            return []
        mined = mine_fpgrowth_itemsets(
            (g.edge_ids for g in self.graphs.values()), support, length
        )
        self.itemsets.extend(mined)
        return mined

    def construct_base_eclat(
        self,
        input_file: Union[str, Path],
        output_file: Union[str, Path],
        support: int,
        length: int,
        eclat_path: Union[str, Sequence[str]],
    ) -> list[ItemsetGraph]:
        """Mine itemsets with an external eclat program and add them to the table.

        ``eclat_path`` is the program, or a command prefix as a sequence.
        """
        if not self.graphs:
            return []
        self.write_mining_input(input_file)
        prefix = [eclat_path] if isinstance(eclat_path, (str, Path)) else list(eclat_path)
        command = [
            *(str(p) for p in prefix),
            "-tc",
            f"-s{support}",
            f"-m{length}",
            str(input_file),
            str(output_file),
        ]
        subprocess.run(command, check=False)
        return self.read_mining_output(output_file)

    def write_mining_input(
        self, path: Union[str, Path], rng: Optional[random.Random] = None
    ) -> int:
        """Write a random sample of graphs, one line of ids each; return the line count."""
        rng = rng if rng is not None else random.Random()
        limit = SAMPLE_LIMIT
        written = 0
        with open(path, "w", encoding="ascii") as out:
            for graph in self.graphs.values():
                if limit == 0:
                    break
                if graph.is_empty():
                    continue
                if rng.randint(1, SAMPLE_PERCENT) == 1 and len(graph) > SAMPLE_MIN_LENGTH:
                    limit -= 1
                    written += 1
                    out.write("".join(f"{e} " for e in graph.edge_ids) + "\n")
        return written

    def read_mining_output(self, path: Union[str, Path]) -> list[ItemsetGraph]:
        """Read mined itemsets from ``path`` and add the best non-redundant ones."""
        try:
            with open(path, encoding="ascii") as stream:
                entries = parse_mining_output(stream)
        except FileNotFoundError:
            logger.warning("can't load file: %s", path)
            return []
        chosen = select_itemsets(entries, self.itemsets, TOP_K)
        self.itemsets.extend(chosen)
        return chosen

    def statistics(self, mirrors: Collection[int] = ()) -> StoreStatistics:
        """Counts over the graphs whose pointers are not in ``mirrors``."""
        stats = StoreStatistics()
        for pointer, graph in self.graphs.items():
            if pointer in mirrors:
                continue
            stats.graph_items += len(graph)
            stats.edges += graph.num_edges(self.itemsets)
            stats.graphs += 1
        stats.base_items = sum(len(g) for g in self.itemsets)
        return stats

    def info(self) -> str:
        """Summary of the number of graphs and edges."""
        edges = sum(g.num_edges(self.itemsets) for g in self.graphs.values())
        return (
            "GraphStore Info >>>>>>>>>>>>>>>>>>>>>>>>>>>\n"
            f"Number of graphs: {len(self.graphs)}\n"
            f"Number of edges: {edges}\n"
        )

    def __len__(self) -> int:
        return len(self.graphs)

    def __str__(self) -> str:
        rule = "============================================"
        with self._lock:
            body = "".join(f">>>>{p} {g}\n" for p, g in self.graphs.items())
            count = len(self.graphs)
        return f"Graphstore<<<<\n{rule}\nThe number of graphs is: {count}\n{body}{rule}\n"