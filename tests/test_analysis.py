"""Tests for dependency cycle detection."""

from __future__ import annotations

from modgraph.analysis import find_cycles
from modgraph.model import DependencyGraph


def _graph(*edges: tuple[str, str]) -> DependencyGraph:
    nodes = sorted({n for edge in edges for n in edge})
    return DependencyGraph(title="t", nodes=nodes, edges={e: set() for e in edges})


def test_acyclic_graph_has_no_cycles(sample_tree):
    from modgraph.builder import build_graph

    assert find_cycles(build_graph(sample_tree)) == []


def test_two_cycles():
    graph = _graph(
        (":a", ":b"),
        (":b", ":a"),
        (":b", ":c"),
        (":c", ":d"),
        (":d", ":e"),
        (":e", ":c"),
    )
    assert find_cycles(graph) == [[":a", ":b"], [":c", ":d", ":e"]]


def test_empty_graph():
    assert find_cycles(DependencyGraph(title="t")) == []
