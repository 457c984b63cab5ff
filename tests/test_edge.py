import pytest

from itemgraphs.edge import Edge


def test_round_trip():
    edge = Edge(-7, 123456, 200)
    assert Edge.from_bytes(edge.to_bytes()) == edge


def test_encoded_size_matches_size_constant():
    assert len(Edge(1, 2, 3).to_bytes()) == Edge.SIZE


def test_wire_layout():
    assert Edge(1, 2, 3).to_bytes() == b"\x01\x00\x00\x00\x02\x00\x00\x00\x03"


def test_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        Edge.from_bytes(b"\x00" * (Edge.SIZE - 1))


def test_unencodable_label():
    with pytest.raises(ValueError):
        Edge(1, 2, 300).to_bytes()


def test_str():
    assert str(Edge(1, 2, 3)) == "1, 2, 3"


def test_equality_and_hashing():
    edges = {Edge(1, 2, 3), Edge(1, 2, 3), Edge(1, 2, 4)}
    assert len(edges) == 2
    assert Edge(1, 2, 3) in edges