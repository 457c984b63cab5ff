import pytest

from itemgraphs.compression import (
    compress_edges,
    is_redundant,
    is_subset,
    mine_fpgrowth_itemsets,
    num_added,
    parse_mining_output,
    select_itemsets,
    subsume,
)
from itemgraphs.itemset_graph import ItemsetGraph, itemset_id


def test_subsume_returns_none_when_not_subset():
    assert subsume((1, 2, 5), ItemsetGraph((2, 3)), -1) is None
    assert subsume((1, 2), ItemsetGraph((1, 2, 3)), -1) is None


def test_subsume_worked_example():
    assert subsume((1, 2, 3, 5), ItemsetGraph((2, 3)), -1) == (-1, 1, 5)


@pytest.mark.parametrize(
    "edges, items, ident",
    [
        ((1, 2, 3, 4, 9), (2, 4), -1),
        ((-5, -1, 3, 4, 7), (3, 7), -3),
        ((-3, 4, 5), (4,), -2),
        ((0, 1), (0, 1), -4),
    ],
)
def test_subsume_invariants(edges, items, ident):
    result = subsume(edges, ItemsetGraph(items), ident)
    assert list(result) == sorted(result)
    assert set(result) == (set(edges) - set(items)) | {ident}
    assert len(result) == len(edges) - len(items) + 1


def test_compress_edges_round_trips_through_expand():
    itemsets = [ItemsetGraph((1, 2)), ItemsetGraph((3, 4))]
    edges = (1, 2, 3, 4, 5)
    compressed = compress_edges(edges, itemsets)
    assert len(compressed) < len(edges)
    assert itemset_id(0) in compressed and itemset_id(1) in compressed
    assert sorted(ItemsetGraph(compressed).expand(itemsets)) == list(edges)


def test_compress_edges_skips_longer_or_absent_itemsets():
    itemsets = [ItemsetGraph((1, 2)), ItemsetGraph((7, 8))]
    assert compress_edges((1,), itemsets) == (1,)
    assert compress_edges((3, 4, 5), itemsets) == (3, 4, 5)


def test_num_added_invariants():
    base = ItemsetGraph((1, 4, 6, 9))
    assert num_added(base, base) == 0
    assert num_added(base, ItemsetGraph()) == len(base)
    assert num_added(base, ItemsetGraph((100, 200))) == len(base)
    assert num_added(ItemsetGraph((1, 2, 3)), ItemsetGraph((2,))) == 2


def test_is_redundant():
    base = ItemsetGraph((1, 2, 3))
    assert is_redundant(base, [ItemsetGraph((1, 2, 3, 4))]) is True
    assert is_redundant(base, [ItemsetGraph((5, 6))]) is False
    assert is_redundant(base, []) is False
    assert is_redundant(ItemsetGraph(), [ItemsetGraph((1,))]) is False


def test_parse_mining_output():
    entries = parse_mining_output(["3 1 2 (5)", "", "   ", "7 (2.5)"])
    assert entries == [
        (ItemsetGraph((1, 2, 3)), 5),
        (ItemsetGraph((7,)), 2),
    ]


def test_parse_mining_output_requires_frequency():
    with pytest.raises(ValueError):
        parse_mining_output(["1 2 3"])


def test_select_itemsets_orders_by_score_and_limits():
    small = ItemsetGraph((1,))
    large = ItemsetGraph((10, 11, 12))
    middle = ItemsetGraph((20, 21))
    entries = [(small, 4), (large, 3), (middle, 1)]
    assert select_itemsets(entries, [], k=2) == [large, small]
    assert select_itemsets(entries, [], k=0) == []


def test_select_itemsets_skips_redundant():
    existing = [ItemsetGraph((1, 2, 3))]
    duplicate = ItemsetGraph((1, 2))
    fresh = ItemsetGraph((8, 9))
    chosen = select_itemsets([(duplicate, 10), (fresh, 1), (fresh, 1)], existing)
    assert chosen == [fresh]


def test_is_subset():
    assert is_subset({1, 2}, {1, 2, 3}) is True
    assert is_subset(set(), {1}) is True
    assert is_subset({1, 4}, {1, 2, 3}) is False


def test_mine_fpgrowth_empty_input():
    assert mine_fpgrowth_itemsets([], 50, 1) == []
    assert mine_fpgrowth_itemsets([[], []], 50, 1) == []


def test_mine_fpgrowth_closed_itemsets():
    transactions = [[1, 2, 3], [1, 2, 3], [1, 2]]
    result = mine_fpgrowth_itemsets(transactions, 50, 1)
    assert result == [ItemsetGraph((1, 2)), ItemsetGraph((1, 2, 3))]


def test_mine_fpgrowth_respects_length_and_subsets():
    transactions = [[1, 2, 3, 4], [1, 2, 3], [2, 3, 4], [1, 4]]
    result = mine_fpgrowth_itemsets(transactions, 50, 2)
    assert result
    assert all(len(graph) >= 2 for graph in result)
    for graph in result:
        support = sum(1 for t in transactions if is_subset(graph.edge_ids, t))
        assert support >= 2
    sizes = [len(g) for g in result]
    assert len(set(map(tuple, (g.edge_ids for g in result)))) == len(sizes)