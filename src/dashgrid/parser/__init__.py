"""Layout data model and JSON (de)serialization."""

from dashgrid.parser.model import (
    APPEND_BOTTOM,
    CompactType,
    GridConfig,
    Layout,
    LayoutItem,
    ResizeHandle,
)
from dashgrid.parser.json_layout import (
    layout_to_json,
    parse_grid_document,
    parse_layout_json,
    parse_responsive_document,
)

__all__ = [
    "APPEND_BOTTOM",
    "CompactType",
    "GridConfig",
    "Layout",
    "LayoutItem",
    "ResizeHandle",
    "layout_to_json",
    "parse_grid_document",
    "parse_layout_json",
    "parse_responsive_document",
]
