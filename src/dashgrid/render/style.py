"""Theme and style constants for layout previews."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a grid layout preview."""

    name: str
    background_color: str
    container_fill: str
    container_stroke: str
    column_guide_fill: str
    item_fill: str
    item_stroke: str
    item_stroke_width: float
    item_corner_radius: float
    label_color: str
    label_font_family: str
    label_font_size: float
    title_color: str
    title_font_size: float
    static_fill: str
    static_stroke: str
    # Drag placeholder settings
    placeholder_fill: str = "rgba(255, 80, 80, 0.25)"
    placeholder_stroke: str = "#ff5050"
    placeholder_dash: str = "6,4"
