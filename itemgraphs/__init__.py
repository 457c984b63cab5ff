"""Itemset-compressed in-memory storage of edge-labelled graphs, with FP-growth mining."""

__version__ = "0.1.0"