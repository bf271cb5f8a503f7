"""Loader protocol: all project-tree loaders conform to this interface."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from modgraph.model import ProjectTree


class TreeLoader(Protocol):
    """Protocol for project-tree loaders."""

    def can_handle(self, project_dir: Path) -> bool:
        """Return True if this loader applies to the given project."""
        ...

    def load(self, project_dir: Path) -> ProjectTree:
        """Return the project tree described by *project_dir*."""
        ...
