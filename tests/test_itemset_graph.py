import io

import pytest

from itemgraphs.itemset_graph import (
    ItemsetGraph,
    is_itemset_id,
    itemset_id,
    itemset_index,
)


@pytest.mark.parametrize("index", [0, 1, 5, 39, 1000])
def test_itemset_id_index_round_trip(index):
    ident = itemset_id(index)
    assert is_itemset_id(ident)
    assert itemset_index(ident) == index


def test_first_itemset_id():
    assert itemset_id(0) == -1


def test_plain_ids_are_not_itemsets():
    assert not is_itemset_id(0)
    assert not is_itemset_id(42)


def test_from_items_sorts_and_dedups():
    graph = ItemsetGraph.from_items([5, 1, 3, 1])
    assert graph.edge_ids == tuple(sorted({5, 1, 3}))
    assert len(graph) == 3


def test_empty_and_compressed_flags():
    assert ItemsetGraph().is_empty()
    assert not ItemsetGraph((1, 2)).is_compressed()
    assert ItemsetGraph((itemset_id(0), 4)).is_compressed()


def test_expand_resolves_itemsets():
    itemsets = [ItemsetGraph((1, 2)), ItemsetGraph((itemset_id(0), 7))]
    graph = ItemsetGraph((itemset_id(1), 5))
    assert sorted(graph.expand(itemsets)) == [1, 2, 5, 7]
    assert graph.num_edges(itemsets) == 4


def test_num_edges_without_itemsets_is_length():
    graph = ItemsetGraph((3, 4, 9))
    assert graph.num_edges([]) == len(graph)


def test_binary_round_trip_stream():
    graphs = [ItemsetGraph((1, 2, 3)), ItemsetGraph(), ItemsetGraph((itemset_id(2), 8))]
    stream = io.BytesIO(b"".join(g.to_bytes() for g in graphs))
    read = []
    while (graph := ItemsetGraph.read_from(stream)) is not None:
        read.append(graph)
    assert read == graphs


def test_truncated_stream_raises():
    data = ItemsetGraph((1, 2, 3)).to_bytes()
    with pytest.raises(ValueError):
        ItemsetGraph.read_from(io.BytesIO(data[:-1]))
    with pytest.raises(ValueError):
        ItemsetGraph.read_from(io.BytesIO(data[:2]))


def test_describe():
    assert ItemsetGraph((1, 2)).describe() == "{size=2; 1, 2, }"


def test_str_reports_size():
    assert "size=3" in str(ItemsetGraph((4, 5, 6)))


def test_equality():
    assert ItemsetGraph([1, 2]) == ItemsetGraph((1, 2))
    assert ItemsetGraph((1, 2)) != ItemsetGraph((1, 3))