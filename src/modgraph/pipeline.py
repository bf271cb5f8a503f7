"""Orchestrator: load → build → write DOT → optional PNG."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from modgraph.analysis import find_cycles
from modgraph.builder import build_graph
from modgraph.config import read_config
from modgraph.extractors import detect_loader
from modgraph.renderer.dot import write_dot
from modgraph.renderer.png import convert_to_png

logger = logging.getLogger(__name__)


def run(
    project_dir: Path,
    *,
    output: Path | None = None,
    fmt: str | None = None,
    manifest: Path | None = None,
    title: str | None = None,
    reset: bool | None = None,
    keep_dot: bool | None = None,
) -> Path:
    """Run the full pipeline and return the path of the final artifact.

    Arguments left as None fall back to the project's config file.  For PNG
    output the DOT file is removed after a successful conversion unless
    *keep_dot* is set; if conversion fails the DOT path is returned.
    """
    project_dir = project_dir.resolve()
    config = read_config(project_dir)

    fmt = fmt or config.format
    reset = config.reset if reset is None else reset
    keep_dot = config.keep_dot if keep_dot is None else keep_dot
    dot_path = output or (project_dir / config.output)

    loader = detect_loader(project_dir, manifest)
    if loader is None:
        logger.error("Could not detect project type.")
        sys.exit(1)

    logger.debug("Loader: %s", type(loader).__name__)
    tree = loader.load(project_dir)

    graph = build_graph(tree.root, title=title or config.title or tree.name)

    for cycle in find_cycles(graph):
        logger.warning("Dependency cycle: %s", " -> ".join(cycle + cycle[:1]))

    dot_file = write_dot(graph, dot_path, reset=reset, colors=config.colors)
    if fmt != "png":
        return dot_file

    png_file = convert_to_png(dot_file)
    if png_file is None:
        return dot_file
    if not keep_dot:
        dot_file.unlink()
    return png_file
