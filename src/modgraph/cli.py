"""Command-line interface for modgraph."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from modgraph.config import FORMATS
from modgraph.pipeline import run

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="modgraph",
        description="Render a multi-module project's internal dependency graph as DOT or PNG.",
    )
    parser.add_argument(
        "project_dir",
        type=Path,
        nargs="?",
        default=Path("."),
        help="Path to the project root (default: current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output DOT file path (default: graphs/dependency-graph/project.dot)",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        dest="fmt",
        help="Output format (default: dot)",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="YAML/JSON project manifest to read instead of the Gradle build",
    )
    parser.add_argument(
        "--title",
        default=None,
        help="Graph title (default: root project name)",
    )
    parser.add_argument(
        "--no-reset",
        action="store_false",
        dest="reset",
        default=None,
        help="Do not delete an existing output file before writing",
    )
    parser.add_argument(
        "--keep-dot",
        action="store_true",
        default=None,
        help="Keep the DOT file after PNG conversion",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    logging.getLogger("modgraph").setLevel(
        logging.DEBUG if args.verbose else logging.INFO
    )

    try:
        run(
            args.project_dir,
            output=args.output,
            fmt=args.fmt,
            manifest=args.manifest,
            title=args.title,
            reset=args.reset,
            keep_dot=args.keep_dot,
        )
    except ValueError as e:
        logger.error("Invalid project description: %s", e)
        sys.exit(1)
