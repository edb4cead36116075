"""JSON serialization for layouts, grid documents and responsive documents.

Layouts are plain lists of item objects with host-facing camelCase keys.
Every item is written with the same key set, so a layout survives a
load/dump round trip verbatim.

Grid document::

    {"cols": 12, "compactType": "vertical", "layout": [...]}

A bare list is accepted as a grid document with default settings.

Responsive document::

    {"breakpoints": {"lg": 1200, ...}, "cols": {"lg": 12, ...},
     "layouts": {"lg": [...], ...}}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from dashgrid.layout.constants import (
    DEFAULT_BREAKPOINT_COLS,
    DEFAULT_BREAKPOINTS,
    DEFAULT_COLS,
)
from dashgrid.parser.model import (
    APPEND_BOTTOM,
    CompactType,
    Layout,
    LayoutItem,
    ResizeHandle,
    RowSentinel,
)

# (json key, attribute name)
_OPTIONAL_INT_FIELDS = [
    ("minW", "min_w"),
    ("minH", "min_h"),
    ("maxW", "max_w"),
    ("maxH", "max_h"),
]
_OPTIONAL_BOOL_FIELDS = [
    ("isDraggable", "is_draggable"),
    ("isResizable", "is_resizable"),
    ("isBounded", "is_bounded"),
]


@dataclass
class GridDocument:
    layout: Layout
    cols: int = DEFAULT_COLS
    compact_type: CompactType = CompactType.VERTICAL
    allow_overlap: bool = False


@dataclass
class ResponsiveDocument:
    breakpoints: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_BREAKPOINTS))
    cols: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_BREAKPOINT_COLS))
    layouts: dict[str, Layout] = field(default_factory=dict)


def _int_field(data: dict, key: str, item_id: str, default: int | None = None) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Item '{item_id}': '{key}' must be a number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Item '{item_id}': '{key}' must be whole, got {value!r}")
        value = int(value)
    return value


def item_from_dict(data: dict[str, Any]) -> LayoutItem:
    """Build a LayoutItem from its JSON object."""
    if not isinstance(data, dict):
        raise ValueError(f"Layout item must be an object, got {type(data).__name__}")
    if "i" not in data:
        raise ValueError(f"Layout item is missing its 'i' identifier: {data!r}")
    item_id = str(data["i"])

    raw_y = data.get("y", 0)
    if raw_y is None or raw_y == RowSentinel.BOTTOM.value:
        y = APPEND_BOTTOM
    else:
        y = _int_field(data, "y", item_id, 0)

    item = LayoutItem(
        i=item_id,
        x=_int_field(data, "x", item_id, 0),
        y=y,
        w=_int_field(data, "w", item_id, 1),
        h=_int_field(data, "h", item_id, 1),
        static=bool(data.get("static", False)),
        moved=bool(data.get("moved", False)),
    )
    for key, attr in _OPTIONAL_INT_FIELDS:
        if data.get(key) is not None:
            setattr(item, attr, _int_field(data, key, item_id))
    for key, attr in _OPTIONAL_BOOL_FIELDS:
        if data.get(key) is not None:
            setattr(item, attr, bool(data[key]))

    handles = data.get("resizeHandles")
    if handles is not None:
        try:
            item.resize_handles = [ResizeHandle(h) for h in handles]
        except ValueError as e:
            raise ValueError(f"Item '{item_id}': {e}") from e
    return item


def item_to_dict(item: LayoutItem) -> dict[str, Any]:
    """Return the JSON object for *item* with a fixed key set."""
    y: int | str = item.y.value if isinstance(item.y, RowSentinel) else item.y
    out: dict[str, Any] = {"i": item.i, "x": item.x, "y": y, "w": item.w, "h": item.h}
    for key, attr in _OPTIONAL_INT_FIELDS:
        out[key] = getattr(item, attr)
    out["static"] = item.static
    for key, attr in _OPTIONAL_BOOL_FIELDS:
        out[key] = getattr(item, attr)
    out["resizeHandles"] = (
        [h.value for h in item.resize_handles] if item.resize_handles is not None else None
    )
    out["moved"] = item.moved
    return out


def parse_layout(data: Any) -> Layout:
    if not isinstance(data, list):
        raise ValueError(f"Layout must be a list of items, got {type(data).__name__}")
    return [item_from_dict(entry) for entry in data]


def parse_layout_json(text: str) -> Layout:
    return parse_layout(_loads(text))


def layout_to_data(layout: Layout) -> list[dict[str, Any]]:
    return [item_to_dict(item) for item in layout]


def layout_to_json(layout: Layout, indent: int | None = 2) -> str:
    return json.dumps(layout_to_data(layout), indent=indent)


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e


def parse_grid_document(text: str) -> GridDocument:
    """Parse a grid document (or a bare layout list)."""
    data = _loads(text)
    if isinstance(data, list):
        return GridDocument(layout=parse_layout(data))
    if not isinstance(data, dict) or "layout" not in data:
        raise ValueError("Grid document must be a list or an object with 'layout'")

    cols = data.get("cols", DEFAULT_COLS)
    if isinstance(cols, bool) or not isinstance(cols, int) or cols < 1:
        raise ValueError(f"'cols' must be a positive integer, got {cols!r}")
    compact_type = data.get("compactType", CompactType.VERTICAL.value)
    try:
        compact_type = CompactType(compact_type or CompactType.NONE.value)
    except ValueError as e:
        raise ValueError(f"Unknown compactType {compact_type!r}") from e

    return GridDocument(
        layout=parse_layout(data["layout"]),
        cols=cols,
        compact_type=compact_type,
        allow_overlap=bool(data.get("allowOverlap", False)),
    )


def grid_document_to_json(doc: GridDocument, indent: int | None = 2) -> str:
    return json.dumps(
        {
            "cols": doc.cols,
            "compactType": doc.compact_type.value,
            "allowOverlap": doc.allow_overlap,
            "layout": layout_to_data(doc.layout),
        },
        indent=indent,
    )


def _int_table(data: Any, name: str) -> dict[str, int]:
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be an object of name -> integer")
    table = {}
    for key, value in data.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"'{name}.{key}' must be an integer, got {value!r}")
        table[str(key)] = value
    return table


def parse_responsive_document(text: str) -> ResponsiveDocument:
    """Parse a responsive document. Missing tables use the defaults."""
    data = _loads(text)
    if not isinstance(data, dict):
        raise ValueError("Responsive document must be an object")
    doc = ResponsiveDocument()
    if "breakpoints" in data:
        doc.breakpoints = _int_table(data["breakpoints"], "breakpoints")
    if "cols" in data:
        doc.cols = _int_table(data["cols"], "cols")
    layouts = data.get("layouts", {})
    if not isinstance(layouts, dict):
        raise ValueError("'layouts' must be an object of breakpoint -> layout")
    doc.layouts = {str(name): parse_layout(lay) for name, lay in layouts.items()}
    return doc


def responsive_document_to_json(doc: ResponsiveDocument, indent: int | None = 2) -> str:
    return json.dumps(
        {
            "breakpoints": doc.breakpoints,
            "cols": doc.cols,
            "layouts": {name: layout_to_data(lay) for name, lay in doc.layouts.items()},
        },
        indent=indent,
    )
