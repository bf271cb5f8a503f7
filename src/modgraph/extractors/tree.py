"""Assemble a ProjectNode tree from flat per-project descriptions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from modgraph.model import Declaration, ProjectNode, ProjectTree

logger = logging.getLogger(__name__)

ROOT_PATH = ":"


@dataclass
class ProjectSpec:
    """What a loader found out about one project before linking."""

    path: str
    capabilities: set[str] = field(default_factory=set)
    # (configuration, target path) in declaration order
    dependencies: list[tuple[str, str]] = field(default_factory=list)


def normalize_path(path: str) -> str:
    """Return *path* in ``:a:b`` form; ``""`` and ``":"`` mean the root."""
    segments = [s for s in path.strip().split(":") if s]
    return ":" + ":".join(segments)


def parent_path(path: str) -> str | None:
    if path == ROOT_PATH:
        return None
    head = path.rsplit(":", 1)[0]
    return head or ROOT_PATH


def assemble_tree(name: str, specs: list[ProjectSpec]) -> ProjectTree:
    """Link *specs* into a tree rooted at ``":"``.

    Missing intermediate projects are created, as Gradle does for
    ``include(":a:b")``.  Dependencies on unknown paths are skipped with a
    warning.  Children keep the order in which their paths first appear.
    """
    nodes: dict[str, ProjectNode] = {ROOT_PATH: ProjectNode(ROOT_PATH)}

    def _ensure(path: str) -> ProjectNode:
        node = nodes.get(path)
        if node is None:
            node = ProjectNode(path)
            nodes[path] = node
            parent = _ensure(parent_path(path) or ROOT_PATH)
            parent.children[path.rsplit(":", 1)[1]] = node
        return node

    for spec in specs:
        node = _ensure(normalize_path(spec.path))
        node.capabilities |= spec.capabilities

    for spec in specs:
        node = nodes[normalize_path(spec.path)]
        by_config: dict[str, Declaration] = {}
        for configuration, target_path in spec.dependencies:
            target = nodes.get(normalize_path(target_path))
            if target is None:
                logger.warning(
                    "%s: %s dependency on unknown project %s, skipping",
                    node.path,
                    configuration,
                    target_path,
                )
                continue
            declaration = by_config.get(configuration)
            if declaration is None:
                declaration = Declaration(configuration)
                by_config[configuration] = declaration
                node.declarations.append(declaration)
            declaration.targets.append(target)

    logger.debug("Assembled %d projects for %s", len(nodes), name)
    root = nodes[ROOT_PATH]
    root.name = name
    return ProjectTree(name=name, root=root)
