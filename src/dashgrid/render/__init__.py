"""SVG previews of grid layouts."""

from dashgrid.render.svg import render_layout_svg

__all__ = ["render_layout_svg"]
