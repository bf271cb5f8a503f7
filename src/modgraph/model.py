"""Data model for multi-module project trees and their dependency graphs."""

from __future__ import annotations

from dataclasses import dataclass, field

# Node categories, in classification precedence order.
MULTIPLATFORM = "multiplatform"
SCRIPT_TARGET = "script-target"
MOBILE_PLATFORM = "mobile-platform"
GENERIC_MANAGED = "generic-managed"
NONE = "none"

CATEGORIES = (MULTIPLATFORM, SCRIPT_TARGET, MOBILE_PLATFORM, GENERIC_MANAGED, NONE)

# Edge traits.
WEAK = "weak"  # implementation-only dependency


@dataclass(eq=False)
class ProjectNode:
    """One module of the build, as exposed by the host project model.

    Nodes compare by identity; the graph keys everything by ``path``.
    """

    path: str
    children: dict[str, ProjectNode] = field(default_factory=dict)
    capabilities: set[str] = field(default_factory=set)
    declarations: list[Declaration] = field(default_factory=list)
    name: str = ""  # display name; set on the root project

    def __repr__(self) -> str:
        return f"ProjectNode({self.path!r})"


@dataclass(eq=False)
class Declaration:
    """Project dependencies declared through one configuration."""

    configuration: str
    targets: list[ProjectNode] = field(default_factory=list)


@dataclass
class ProjectTree:
    """A loaded build: its display name and root project (path ``":"``)."""

    name: str
    root: ProjectNode


@dataclass
class DependencyGraph:
    """Deduplicated, ordered graph ready to be rendered."""

    title: str
    nodes: list[str] = field(default_factory=list)
    edges: dict[tuple[str, str], set[str]] = field(default_factory=dict)
    roots: list[str] = field(default_factory=list)
    categories: dict[str, str] = field(default_factory=dict)
