"""Project module dependency graphs for multi-module builds."""

from modgraph.builder import build_graph, collect_edges, discover_projects
from modgraph.model import Declaration, DependencyGraph, ProjectNode, ProjectTree
from modgraph.renderer.dot import render_dot, write_dot

__version__ = "0.1.0"

__all__ = [
    "Declaration",
    "DependencyGraph",
    "ProjectNode",
    "ProjectTree",
    "build_graph",
    "collect_edges",
    "discover_projects",
    "render_dot",
    "write_dot",
]
