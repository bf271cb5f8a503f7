"""Project-tree loaders and loader detection."""

from __future__ import annotations

from pathlib import Path

from modgraph.extractors.base import TreeLoader
from modgraph.extractors.gradle import GradleTreeLoader
from modgraph.extractors.manifest import ManifestTreeLoader

__all__ = [
    "GradleTreeLoader",
    "ManifestTreeLoader",
    "TreeLoader",
    "detect_loader",
]


def detect_loader(project_dir: Path, manifest: Path | None = None) -> TreeLoader | None:
    """Return the loader for *project_dir*, or None if the project type is unknown.

    An explicit or discovered manifest wins over the Gradle build scripts.
    """
    candidates: list[TreeLoader] = [ManifestTreeLoader(manifest), GradleTreeLoader()]
    for loader in candidates:
        if loader.can_handle(project_dir):
            return loader
    return None
