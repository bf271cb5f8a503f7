"""Output file lifecycle helpers."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_PATH = Path("graphs") / "dependency-graph" / "project.dot"


def provide_graph_file(path: Path, *, reset_if_exists: bool) -> Path:
    """Make sure *path* exists as a file and return it.

    A missing file is created along with its parent directories.  An existing
    file is deleted and recreated empty when *reset_if_exists* is set, and
    left alone otherwise.  File-system errors propagate.
    """
    if not path.exists():
        _create(path)
    elif reset_if_exists:
        logger.debug("Resetting %s", path)
        path.unlink()
        _create(path)
    return path


def default_graph_file(root_dir: Path, *, reset_if_exists: bool = True) -> Path:
    """Return the default graph file under *root_dir*."""
    return provide_graph_file(root_dir / DEFAULT_GRAPH_PATH, reset_if_exists=reset_if_exists)


def _create(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
