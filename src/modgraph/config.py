"""Optional per-project settings from .modgraph.toml or [tool.modgraph]."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from modgraph.output import DEFAULT_GRAPH_PATH

logger = logging.getLogger(__name__)

FORMATS = ("dot", "png")


@dataclass
class GraphConfig:
    output: Path = DEFAULT_GRAPH_PATH  # relative to the project directory
    title: str | None = None
    format: str = "dot"
    reset: bool = True
    keep_dot: bool = False
    colors: dict[str, str] = field(default_factory=dict)


def _load_toml(path: Path) -> dict | None:
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("Could not read %s: %s", path, e)
        return None


def _read_table(project_dir: Path) -> dict:
    # Try .modgraph.toml first
    modgraph_toml = project_dir / ".modgraph.toml"
    if modgraph_toml.exists():
        data = _load_toml(modgraph_toml)
        if data is not None:
            return data.get("modgraph", {})

    # Fall back to [tool.modgraph] in pyproject.toml
    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        data = _load_toml(pyproject)
        if data is not None:
            return data.get("tool", {}).get("modgraph", {})

    return {}


def read_config(project_dir: Path) -> GraphConfig:
    """Return the settings for *project_dir*, falling back to defaults."""
    table = _read_table(project_dir)
    config = GraphConfig()

    if isinstance(table.get("output"), str):
        config.output = Path(table["output"])
    if isinstance(table.get("title"), str):
        config.title = table["title"]
    fmt = table.get("format")
    if fmt in FORMATS:
        config.format = fmt
    elif fmt is not None:
        logger.warning("Unknown output format %r in config, using %s", fmt, config.format)
    if isinstance(table.get("reset"), bool):
        config.reset = table["reset"]
    if isinstance(table.get("keep_dot"), bool):
        config.keep_dot = table["keep_dot"]
    colors = table.get("colors")
    if isinstance(colors, dict):
        config.colors = {str(k): str(v) for k, v in colors.items()}

    return config
