"""Graph renderers."""

from modgraph.renderer.dot import render_dot, write_dot
from modgraph.renderer.png import convert_to_png

__all__ = ["convert_to_png", "render_dot", "write_dot"]
