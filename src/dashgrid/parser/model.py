"""Data model for grid layouts."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum


class RowSentinel(Enum):
    """Symbolic row values that are resolved before any arithmetic."""

    BOTTOM = "bottom"


APPEND_BOTTOM = RowSentinel.BOTTOM
"""Place the item one past the current maximum row."""


class CompactType(Enum):
    """Axis along which a compactor pulls items toward the origin."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    NONE = "none"


class ResizeHandle(Enum):
    """Edge or corner of an item that a resize gesture is anchored to."""

    S = "s"
    W = "w"
    E = "e"
    N = "n"
    SW = "sw"
    NW = "nw"
    SE = "se"
    NE = "ne"

    @property
    def affects_west(self) -> bool:
        return "w" in self.value

    @property
    def affects_north(self) -> bool:
        return "n" in self.value


@dataclass
class LayoutItem:
    """A rectangular item placed on the grid, in grid units."""

    i: str
    x: int = 0
    y: int | RowSentinel = 0
    w: int = 1
    h: int = 1
    min_w: int | None = None
    min_h: int | None = None
    max_w: int | None = None
    max_h: int | None = None
    static: bool = False
    is_draggable: bool | None = None
    is_resizable: bool | None = None
    is_bounded: bool | None = None
    resize_handles: list[ResizeHandle] | None = None
    # Scratch flag, only meaningful inside a single compaction/move pass
    moved: bool = False

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def clone(self) -> LayoutItem:
        handles = list(self.resize_handles) if self.resize_handles is not None else None
        return replace(self, resize_handles=handles)


Layout = list[LayoutItem]
"""Ordered items. Order is insertion order and breaks every tie."""


@dataclass
class GridConfig:
    """Container geometry shared by the position and constraint helpers."""

    cols: int = 12
    row_height: float = 150.0
    margin: tuple[float, float] = (10.0, 10.0)
    # None means "same as margin"
    container_padding: tuple[float, float] | None = None
    max_rows: float = math.inf
    width: float = 1280.0

    @property
    def padding(self) -> tuple[float, float]:
        if self.container_padding is None:
            return self.margin
        return self.container_padding


@dataclass
class Position:
    """Pixel geometry of an item inside its container."""

    left: float
    top: float
    width: float
    height: float


@dataclass
class DroppingPosition:
    """Pointer position of an external item being dragged over the grid."""

    left: float
    top: float
    events: dict = field(default_factory=dict)


def clone_layout(layout: Layout) -> Layout:
    """Return a deep copy of *layout* with fresh item objects."""
    return [item.clone() for item in layout]


def get_layout_item(layout: Layout, item_id: str) -> LayoutItem | None:
    """Return the item with id *item_id*, or None when absent."""
    for item in layout:
        if item.i == item_id:
            return item
    return None


def get_statics(layout: Layout) -> Layout:
    return [item for item in layout if item.static]
