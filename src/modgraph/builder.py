"""Build a deduplicated, deterministically ordered dependency graph from a project tree."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, Iterator

from modgraph.model import DependencyGraph, ProjectNode
from modgraph.policies import (
    CLASSIFICATION_RULES,
    DEFAULT_TRAIT_POLICIES,
    Rule,
    TraitPolicy,
    classify,
    traits_for,
)

logger = logging.getLogger(__name__)


def _walk(root: ProjectNode) -> Iterator[ProjectNode]:
    """Yield *root* and its descendants breadth-first."""
    queue = deque([root])
    while queue:
        project = queue.popleft()
        yield project
        queue.extend(project.children.values())


def discover_projects(root: ProjectNode) -> list[ProjectNode]:
    """Return every project in the tree in breadth-first order.

    Every project starts out as a root candidate.
    """
    return list(_walk(root))


def collect_edges(
    root: ProjectNode,
    trait_policies: Iterable[TraitPolicy] = DEFAULT_TRAIT_POLICIES,
    rules: Iterable[Rule] = CLASSIFICATION_RULES,
) -> tuple[
    dict[str, ProjectNode], dict[tuple[str, str], set[str]], dict[str, str], set[str]
]:
    """Collect graph nodes, merged edges, node categories and dependency targets.

    Returns ``(nodes, edges, categories, targets)``.  *nodes* maps identifiers
    to projects in first-seen order, *edges* maps ``(source, target)`` to the
    union of traits of every declaration connecting that pair (first-seen
    order), *categories* holds the category of every visited project and of
    every dependency target, and *targets* is every declared dependency
    target, self-dependencies included.
    """
    trait_policies = tuple(trait_policies)
    rules = tuple(rules)

    nodes: dict[str, ProjectNode] = {}
    edges: dict[tuple[str, str], set[str]] = {}
    categories: dict[str, str] = {}
    targets: set[str] = set()

    for project in _walk(root):
        for declaration in project.declarations:
            for target in declaration.targets:
                nodes.setdefault(project.path, project)
                nodes.setdefault(target.path, target)
                targets.add(target.path)

                if target.path == project.path:
                    logger.debug(
                        "Ignoring self-dependency of %s (%s)",
                        project.path,
                        declaration.configuration,
                    )
                    continue

                traits = edges.setdefault((project.path, target.path), set())
                traits |= traits_for(declaration, trait_policies)

        categories[project.path] = classify(project, rules)

    # Dependency targets outside the walked tree still need a color.
    for path, node in nodes.items():
        if path not in categories:
            categories[path] = classify(node, rules)

    return nodes, edges, categories, targets


def find_roots(candidates: Iterable[ProjectNode], targets: Iterable[str]) -> list[str]:
    """Return the candidates nothing declares a dependency on, in candidate order."""
    targets = set(targets)
    return [p.path for p in candidates if p.path not in targets]


def build_graph(
    root: ProjectNode,
    *,
    title: str | None = None,
    trait_policies: Iterable[TraitPolicy] = DEFAULT_TRAIT_POLICIES,
    rules: Iterable[Rule] = CLASSIFICATION_RULES,
) -> DependencyGraph:
    """Discover, collect and finalize the dependency graph rooted at *root*.

    *title* defaults to the root project's name, or its path when unnamed.
    """
    candidates = discover_projects(root)
    nodes, edges, categories, targets = collect_edges(root, trait_policies, rules)
    roots = find_roots(candidates, targets)

    if title is None:
        title = root.name or root.path

    graph = DependencyGraph(
        title=title,
        nodes=sorted(nodes),
        edges=edges,
        roots=roots,
        categories={path: categories[path] for path in nodes},
    )
    logger.debug(
        "Graph: %d projects discovered, %d nodes, %d edges, %d roots",
        len(candidates),
        len(graph.nodes),
        len(graph.edges),
        len(graph.roots),
    )
    return graph
