# itemgraphs

`itemgraphs` keeps many edge-labelled graphs compactly in memory. One example
is a set of points-to graphs, one per program point. Each distinct
`(src, dst, label)` edge is given an integer id, so a graph becomes a sorted
tuple of edge ids. Frequent sets of edge ids are then replaced by one negative
itemset id each. Those sets are found by FP-growth or by an external eclat
miner.

Graphs are passed in and out as plain mappings of the form
`{src: [(dst, label), ...]}`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `itemgraphs.edge`: `Edge`, a frozen dataclass for a labelled edge. It has a
  fixed 9-byte little-endian encoding, written by `to_bytes` and read by
  `Edge.from_bytes`.
- `itemgraphs.itemset_graph`: `ItemsetGraph`, a tuple of edge ids and itemset
  ids.
  - `expand` and `num_edges` resolve nested itemsets. `is_compressed` reports
    whether the graph uses any itemset id.
  - `to_bytes` and `ItemsetGraph.read_from` give a binary encoding.
  - Helper functions: `is_itemset_id`, `itemset_id` and `itemset_index`.
- `itemgraphs.edge_index`: `EdgeIndex` maps edges to consecutive ids and back.
  - `intern`, `lookup` and `edge` work on single edges.
  - It converts between representations with `to_itemset_graph`,
    `to_itemset_graph_hybrid`, `to_edge_map`, `to_hybrid_graph` and
    `construct_hybrid_graph`.
  - `construct_hybrid_graph` builds the new hybrid graph from the difference
    between a graph and its previous version.
- `itemgraphs.fptree`: `FPTree`, `contains_single_path` and `fptree_growth`.
  `fptree_growth` returns `(frozenset_of_items, support)` patterns.
- `itemgraphs.compression`:
  - `subsume` and `compress_edges` replace contained itemsets with their ids.
  - `num_added` and `is_redundant` check whether an itemset is redundant.
  - `parse_mining_output` reads lines such as `"3 1 2 (5)"`.
  - `select_itemsets` picks the top-k non-redundant itemsets.
  - `mine_fpgrowth_itemsets` mines closed frequent itemsets. Its support is a
    percentage of the transactions.
- `itemgraphs.hybrid`: `HybridGraph` holds an itemset part together with edges
  not yet indexed. `HybridGraphStore` is a thread-safe pointer-to-graph map.
- `itemgraphs.itemset_store`: `ItemsetGraphStore` holds the graphs, one shared
  `EdgeIndex` and the itemset table.
  - Reading: `retrieve`, `retrieve_update` and `retrieve_direct`.
  - Writing: `update`, `update_hybrid`, `update_graphs` and
    `update_graphs_hybrid`. The bulk updates can run sequentially or on a
    thread pool.
  - Compression: `compress_graph` and `compress_graphs`.
  - Building the itemset base: `construct_base_fpgrowth`, or
    `construct_base_eclat`.
    - `construct_base_eclat` writes a random sample of the graphs with
      `write_mining_input`.
    - It then runs the eclat program you name as
      `<eclat> -tc -s<support> -m<length> <input> <output>`.
    - Finally it reads the results back with `read_mining_output`.
  - Reporting: `statistics(mirrors)` returns a `StoreStatistics`, and `info()`
    returns a text summary.
- Small helpers:
  - `minheap.MinHeap` and `MinHeapNode`: a min-heap keyed by
    `(vertex, label)`.
  - `edgelist.EdgeList`: an append-only list of `(vertex, label)` edges.

## Example

```python
from itemgraphs.fptree import FPTree, fptree_growth
from itemgraphs.itemset_store import ItemsetGraphStore

transactions = [[1, 2, 3], [1, 2], [2, 3], [1, 2, 3]]
for items, support in sorted(fptree_growth(FPTree(transactions, 2)),
                             key=lambda p: sorted(p[0])):
    print(sorted(items), support)

store = ItemsetGraphStore()
store.update(7, {1: [(2, 0), (3, 1)]})
print(store.retrieve(7))       # {1: [(2, 0), (3, 1)]}
print(store.info())
```

## What it does not do

- It keeps everything in memory. There is no function that saves a whole
  `ItemsetGraphStore` to disk or loads one back, and no file format for
  exchanging graphs between stores.
- Only single edges (`Edge.to_bytes`) and single itemset graphs
  (`ItemsetGraph.to_bytes` / `read_from`) have a binary encoding.
- There is no command-line program.
- Eclat mining needs an eclat executable that you supply yourself.