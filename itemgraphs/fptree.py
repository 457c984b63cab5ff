"""Frequent-pattern tree and the FP-growth mining algorithm."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

Item = int
Transaction = list[Item]
Pattern = tuple[frozenset[Item], int]


@dataclass(eq=False)
class FPNode:
    """A node of an FP-tree: an item, its count and its links."""

    item: Item
    parent: Optional["FPNode"] = field(default=None, repr=False)
    frequency: int = 1
    node_link: Optional["FPNode"] = field(default=None, repr=False)
    children: list["FPNode"] = field(default_factory=list, repr=False)

    def child(self, item: Item) -> Optional["FPNode"]:
        """The child holding ``item``, if there is one."""
        return next((c for c in self.children if c.item == item), None)


def _chain(node: Optional[FPNode]) -> Iterator[FPNode]:
    while node is not None:
        yield node
        node = node.node_link


class FPTree:
    """FP-tree built from transactions, keeping items whose support meets the threshold."""

    def __init__(
        self, transactions: Iterable[Iterable[Item]], minimum_support_threshold: int
    ) -> None:
        if minimum_support_threshold < 0:
            raise ValueError("minimum support threshold must not be negative")
        self.root = FPNode(0)
        self.header_table: dict[Item, FPNode] = {}
        self.minimum_support_threshold = minimum_support_threshold

        transactions = [list(t) for t in transactions]
        counts = Counter(item for t in transactions for item in t)
        ordered = sorted(
            (
                (freq, item)
                for item, freq in counts.items()
                if freq >= minimum_support_threshold
            ),
            reverse=True,
        )
        items_by_frequency = [item for _, item in ordered]

        tails: dict[Item, FPNode] = {}
        for transaction in transactions:
            present = set(transaction)
            node = self.root
            for item in items_by_frequency:
                if item not in present:
                    continue
                child = node.child(item)
                if child is None:
                    child = FPNode(item, parent=node)
                    node.children.append(child)
                    if item in tails:
                        tails[item].node_link = child
                    else:
                        self.header_table[item] = child
                    tails[item] = child
                else:
                    child.frequency += 1
                node = child

    def is_empty(self) -> bool:
        return not self.root.children


def contains_single_path(tree: FPTree) -> bool:
    """True if the tree is empty or forms a single chain below the root."""
    node = tree.root
    while node.children:
        if len(node.children) > 1:
            return False
        node = node.children[0]
    return True


def fptree_growth(tree: FPTree) -> set[Pattern]:
    """Mine all frequent patterns as (itemset, frequency) pairs."""
    if tree.is_empty():
        return set()

    if contains_single_path(tree):
        patterns: set[Pattern] = set()
        node: Optional[FPNode] = tree.root.children[0]
        while node is not None:
            extended = {(items | {node.item}, node.frequency) for items, _ in patterns}
            patterns.add((frozenset({node.item}), node.frequency))
            patterns |= extended
            node = node.children[0] if node.children else None
        return patterns

    patterns = set()
    for item in sorted(tree.header_table):
        start = tree.header_table[item]
        conditional: list[Transaction] = []
        for path_start in _chain(start):
            path: list[Item] = []
            current = path_start.parent
            while current is not None and current.parent is not None:
                path.append(current.item)
                current = current.parent
            if path:
                conditional.extend(list(path) for _ in range(path_start.frequency))

        conditional_tree = FPTree(conditional, tree.minimum_support_threshold)
        conditional_patterns = fptree_growth(conditional_tree)

        total = sum(node.frequency for node in _chain(start))
        patterns.add((frozenset({item}), total))
        for items, freq in conditional_patterns:
            patterns.add((items | {item}, freq))
    return patterns