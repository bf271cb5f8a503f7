"""Flatten a DOT file to PNG with the Graphviz ``dot`` program."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60  # seconds


def convert_to_png(dot_path: Path, *, timeout: float = DEFAULT_TIMEOUT) -> Path | None:
    """Run ``dot -Tpng -O`` on *dot_path* and return the PNG path.

    Conversion is best-effort: a missing ``dot`` executable, a non-zero exit
    status or a timeout is logged and reported as ``None``.  The DOT file is
    never modified or removed here.
    """
    dot = shutil.which("dot")
    if not dot:
        logger.warning(
            "Graphviz 'dot' not found; skipping PNG conversion of %s. "
            "Install Graphviz to enable PNG output.",
            dot_path,
        )
        return None

    dot_path = dot_path.resolve()
    cmd = [dot, "-Tpng", "-O", str(dot_path)]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(dot_path.parent),
            timeout=timeout,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.warning("Could not run dot on %s: %s", dot_path, e)
        return None

    if result.returncode != 0:
        logger.warning(
            "dot failed for %s: %s",
            dot_path,
            result.stderr.strip() if result.stderr else "unknown error",
        )
        return None

    # -O appends the format suffix to the input file name.
    png_path = dot_path.with_name(dot_path.name + ".png")
    if not png_path.exists():
        logger.warning("PNG not found at %s after conversion", png_path)
        return None

    logger.info("Project module dependency graph rendered at %s", png_path)
    return png_path
