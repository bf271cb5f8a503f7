"""Render a DependencyGraph as Graphviz DOT text."""

from __future__ import annotations

import logging
from pathlib import Path

from modgraph.model import (
    GENERIC_MANAGED,
    MOBILE_PLATFORM,
    MULTIPLATFORM,
    NONE,
    SCRIPT_TARGET,
    WEAK,
    DependencyGraph,
)
from modgraph.output import provide_graph_file

logger = logging.getLogger(__name__)

CATEGORY_COLORS: dict[str, str] = {
    MULTIPLATFORM: "#ffd2b3",
    SCRIPT_TARGET: "#ffffba",
    MOBILE_PLATFORM: "#baffc9",
    GENERIC_MANAGED: "#ffb3ba",
    NONE: "#eeeeee",
}

TRAIT_ATTRIBUTES: dict[str, str] = {
    WEAK: "style=dotted",
}


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _edge_attributes(traits: set[str]) -> list[str]:
    return [TRAIT_ATTRIBUTES[t] for t in sorted(traits) if t in TRAIT_ATTRIBUTES]


def render_dot(graph: DependencyGraph, colors: dict[str, str] | None = None) -> str:
    """Return the DOT description of *graph*.

    *colors* overrides entries of :data:`CATEGORY_COLORS`.  The result only
    depends on the graph contents, so equal graphs render to equal text.
    """
    palette = {**CATEGORY_COLORS, **(colors or {})}
    # The label keeps a trailing line so the title clears the top rank.
    label = _quote(graph.title + "\n ")

    lines = [
        "digraph {",
        f"  graph [label={label},labelloc=t,fontsize=30,ranksep=1.4];",
        '  node [style=filled, fillcolor="#bbbbbb"];',
        "rankdir=TB;",
        "",
        "  # Projects",
        "",
    ]

    for node in graph.nodes:
        category = graph.categories.get(node, NONE)
        color = palette.get(category, palette[NONE])
        lines.append(f"  {_quote(node)} [fillcolor={_quote(color)}];")

    roots = set(graph.roots)
    rank = "".join(f" {_quote(node)};" for node in graph.nodes if node in roots)
    lines.append("")
    lines.append(f"  {{rank = same;{rank}}}")

    lines.append("")
    lines.append("  # Dependencies")
    lines.append("")
    for (source, target), traits in graph.edges.items():
        line = f"  {_quote(source)} -> {_quote(target)}"
        attrs = _edge_attributes(traits)
        if attrs:
            line += f" [{', '.join(attrs)}]"
        lines.append(line)

    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(
    graph: DependencyGraph,
    output_path: Path,
    *,
    reset: bool = True,
    colors: dict[str, str] | None = None,
) -> Path:
    """Write the DOT description of *graph* to *output_path*.

    The text is rendered completely before the file is touched.  With
    *reset* an existing file is deleted and recreated first; either way the
    file ends up holding exactly one complete graph.
    """
    text = render_dot(graph, colors)
    dot_file = provide_graph_file(output_path, reset_if_exists=reset)
    dot_file.write_text(text, encoding="utf-8")
    logger.info("Project module dependency graph created at %s", dot_file.resolve())
    return dot_file
