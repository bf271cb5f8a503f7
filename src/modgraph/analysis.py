"""Post-build graph analysis (cycle detection)."""

from __future__ import annotations

from collections import defaultdict

from modgraph.model import DependencyGraph


def find_cycles(graph: DependencyGraph) -> list[list[str]]:
    """Return strongly-connected components of size ≥ 2 using Tarjan's algorithm.

    Each returned list is a group of projects that are mutually reachable via
    dependency edges, i.e. a dependency cycle.  Projects that are not part of
    any cycle are omitted.  Members are listed in ascending order and groups
    are ordered by their first member.
    """
    successors: dict[str, list[str]] = defaultdict(list)
    for source, target in graph.edges:
        successors[source].append(target)

    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    on_stack: set[str] = set()
    stack: list[str] = []
    sccs: list[list[str]] = []
    counter = [0]

    def _visit(v: str) -> None:
        index[v] = lowlink[v] = counter[0]
        counter[0] += 1
        stack.append(v)
        on_stack.add(v)

        for w in successors[v]:
            if w not in index:
                _visit(w)
                lowlink[v] = min(lowlink[v], lowlink[w])
            elif w in on_stack:
                lowlink[v] = min(lowlink[v], index[w])

        if lowlink[v] == index[v]:
            scc: list[str] = []
            while True:
                w = stack.pop()
                on_stack.discard(w)
                scc.append(w)
                if w == v:
                    break
            if len(scc) >= 2:
                sccs.append(sorted(scc))

    for v in graph.nodes:
        if v not in index:
            _visit(v)

    return sorted(sccs)
