"""Graphs stored as sorted edge ids, possibly compressed with itemset ids."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, Sequence

_LEN = struct.Struct("<I")


def is_itemset_id(edge_id: int) -> bool:
    """Itemset references are encoded as negative ids."""
    return edge_id < 0


def itemset_id(index: int) -> int:
    """Id used to reference the itemset at ``index`` in the itemset table."""
    return -(index + 1)


def itemset_index(id_itemset: int) -> int:
    """Index in the itemset table of the itemset with id ``id_itemset``."""
    return -(id_itemset + 1)


@dataclass
class ItemsetGraph:
    """A graph as a sorted sequence of edge ids and itemset ids."""

    edge_ids: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.edge_ids = tuple(self.edge_ids)

    @classmethod
    def from_items(cls, items: Iterable[int]) -> "ItemsetGraph":
        """Build from an unordered collection of distinct ids, sorted ascending."""
        return cls(tuple(sorted(set(items))))

    def is_empty(self) -> bool:
        return not self.edge_ids

    def is_compressed(self) -> bool:
        """True if the graph references at least one itemset."""
        return any(is_itemset_id(e) for e in self.edge_ids)

    def expand(self, itemsets: Sequence["ItemsetGraph"]) -> list[int]:
        """All plain edge ids, with itemset references resolved recursively."""
        edges: list[int] = []
        pending: list[ItemsetGraph] = [self]
        while pending:
            graph = pending.pop()
            for edge_id in graph.edge_ids:
                if is_itemset_id(edge_id):
                    pending.append(itemsets[itemset_index(edge_id)])
                else:
                    edges.append(edge_id)
        return edges

    def num_edges(self, itemsets: Sequence["ItemsetGraph"]) -> int:
        """Number of plain edges once itemsets are expanded."""
        if not itemsets:
            return len(self.edge_ids)
        return len(self.expand(itemsets))

    def to_bytes(self) -> bytes:
        """Length as uint32 followed by the ids as little-endian int32."""
        count = len(self.edge_ids)
        return _LEN.pack(count) + struct.pack(f"<{count}i", *self.edge_ids)

    @classmethod
    def read_from(cls, stream: BinaryIO) -> "ItemsetGraph | None":
        """Read one encoded graph; None at a clean end of stream."""
        header = stream.read(_LEN.size)
        if not header:
            return None
        if len(header) != _LEN.size:
            raise ValueError("truncated itemset graph header")
        (count,) = _LEN.unpack(header)
        body = stream.read(4 * count)
        if len(body) != 4 * count:
            raise ValueError("truncated itemset graph body")
        return cls(struct.unpack(f"<{count}i", body))

    def describe(self) -> str:
        ids = "".join(f"{e}, " for e in self.edge_ids)
        return f"{{size={len(self.edge_ids)}; {ids}}}"

    def __str__(self) -> str:
        rule = "---------------------"
        return f"ItemsetGraph<<<<\n{rule}\nsize={len(self.edge_ids)}\n{rule}\n"

    def __len__(self) -> int:
        return len(self.edge_ids)