"""Compressing edge-id sets with frequent itemsets, and mining those itemsets."""

from __future__ import annotations

import math
import re
from bisect import bisect_left
from typing import Iterable, Optional, Sequence

from itemgraphs.fptree import FPTree, Pattern, fptree_growth
from itemgraphs.itemset_graph import ItemsetGraph, itemset_id

DEFAULT_TOP_K = 40
REDUNDANCY_RATIO = 0.01

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    """Integer value of the leading digits of ``text`` (e.g. ``"45.2"`` -> 45)."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return int(match.group(1))


def subsume(
    edge_ids: Sequence[int], itemset: ItemsetGraph, id_itemset: int
) -> Optional[tuple[int, ...]]:
    """Replace ``itemset`` inside the sorted ``edge_ids`` by ``id_itemset``.

    Returns the new sorted ids, or None when ``itemset`` is not a subset of
    ``edge_ids``.
    """
    items = itemset.edge_ids
    i = 0
    for value in edge_ids:
        if i == len(items):
            break
        if value == items[i]:
            i += 1
        elif value > items[i]:
            return None
    if i < len(items):
        return None

    members = set(items)
    remaining = [value for value in edge_ids if value not in members]
    remaining.insert(bisect_left(remaining, id_itemset), id_itemset)
    return tuple(remaining)


def compress_edges(
    edge_ids: Sequence[int], itemsets: Sequence[ItemsetGraph]
) -> tuple[int, ...]:
    """Apply every itemset of the table in turn, replacing the ones contained."""
    current = tuple(edge_ids)
    for index, itemset in enumerate(itemsets):
        if len(current) < len(itemset):
            continue
        replaced = subsume(current, itemset, itemset_id(index))
        if replaced is not None:
            current = replaced
    return current


def num_added(base: ItemsetGraph, objective: ItemsetGraph) -> int:
    """Number of ids of the sorted ``base`` that the sorted ``objective`` lacks."""
    a, b = base.edge_ids, objective.edge_ids
    i = j = 0
    diff = 0
    while i < len(a) and j < len(b):
        if a[i] < b[j]:
            diff += 1
            i += 1
        elif a[i] == b[j]:
            i += 1
            j += 1
        else:
            j += 1
    return diff + (len(a) - i)


def is_redundant(base: ItemsetGraph, itemsets: Iterable[ItemsetGraph]) -> bool:
    """True if ``base`` adds almost nothing (under 1%) to some existing itemset."""
    if base.is_empty():
        return False
    return any(
        num_added(base, other) / len(base) < REDUNDANCY_RATIO for other in itemsets
    )


def parse_mining_output(lines: Iterable[str]) -> list[tuple[ItemsetGraph, int]]:
    """Parse lines such as ``"3 1 2 (5)"`` into (itemset, frequency) pairs."""
    entries: list[tuple[ItemsetGraph, int]] = []
    for line in lines:
        tokens = line.split()
        if not tokens:
            continue
        items: set[int] = set()
        frequency: Optional[int] = None
        for token in tokens:
            if token.startswith("("):
                frequency = _leading_int(token.replace("(", "").replace(")", ""))
            else:
                items.add(_leading_int(token))
        if frequency is None:
            raise ValueError(f"missing frequency in line: {line!r}")
        entries.append((ItemsetGraph.from_items(items), frequency))
    return entries


def select_itemsets(
    entries: Iterable[tuple[ItemsetGraph, int]],
    itemsets: Sequence[ItemsetGraph],
    k: int = DEFAULT_TOP_K,
) -> list[ItemsetGraph]:
    """Pick up to ``k`` non-redundant itemsets, best (frequency x size) first.

    Redundancy is judged against ``itemsets`` and the ones already picked.
    Among equal scores, later entries come first.
    """
    scored = sorted(
        ((frequency * len(graph), graph) for graph, frequency in entries),
        key=lambda pair: pair[0],
    )
    chosen: list[ItemsetGraph] = []
    existing = list(itemsets)
    for _, graph in reversed(scored):
        if k <= 0:
            break
        if not is_redundant(graph, existing):
            chosen.append(graph)
            existing.append(graph)
            k -= 1
    return chosen


def is_subset(small: Iterable[int], large: Iterable[int]) -> bool:
    """True if every element of ``small`` is in ``large``."""
    pool = set(large)
    return all(item in pool for item in small)


def mine_fpgrowth_itemsets(
    transactions: Iterable[Sequence[int]], support: int, length: int
) -> list[ItemsetGraph]:
    """Mine closed frequent itemsets of at least ``length`` items with FP-growth.

    ``support`` is a percentage of the non-empty transactions.  Results are
    ordered by decreasing frequency, then increasing size.
    """
    rows = [list(t) for t in transactions if len(t) > 0]
    if not rows:
        return []
    threshold = math.floor(len(rows) * (support / 100))
    patterns = [
        p for p in fptree_growth(FPTree(rows, threshold)) if len(p[0]) >= length
    ]
    patterns.sort(key=lambda p: (tuple(sorted(p[0])), p[1]))
    patterns.sort(key=lambda p: (-p[1], len(p[0])))

    def absorbed(pattern: Pattern) -> bool:
        items, frequency = pattern
        return any(
            other_freq == frequency
            and len(other_items) > len(items)
            and is_subset(items, other_items)
            for other_items, other_freq in patterns
        )

    return [ItemsetGraph.from_items(items) for items, freq in patterns if not absorbed((items, freq))]