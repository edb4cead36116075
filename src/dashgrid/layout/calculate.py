"""Grid unit <-> pixel conversion.

Margins only sit between units, never after the last one, so an item
``w`` columns wide is ``w * col_width + (w - 1) * margin_x`` pixels.
Container padding offsets both directions of the conversion.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from dashgrid.layout.constants import (
    DEFAULT_COLS,
    DEFAULT_CONTAINER_WIDTH,
    DEFAULT_MARGIN,
    DEFAULT_MAX_ROWS,
    DEFAULT_ROW_HEIGHT,
)
from dashgrid.parser.model import GridConfig, Position, ResizeHandle

_WEST_HANDLES = {ResizeHandle.W, ResizeHandle.NW, ResizeHandle.SW}
_NORTH_HANDLES = {ResizeHandle.N, ResizeHandle.NW, ResizeHandle.NE}


@dataclass
class PositionParams:
    """Everything needed to map grid units to container pixels."""

    margin: tuple[float, float] = DEFAULT_MARGIN
    container_padding: tuple[float, float] = DEFAULT_MARGIN
    container_width: float = DEFAULT_CONTAINER_WIDTH
    cols: int = DEFAULT_COLS
    row_height: float = DEFAULT_ROW_HEIGHT
    max_rows: float = DEFAULT_MAX_ROWS

    @classmethod
    def from_config(cls, config: GridConfig) -> PositionParams:
        return cls(
            margin=config.margin,
            container_padding=config.padding,
            container_width=config.width,
            cols=config.cols,
            row_height=config.row_height,
            max_rows=config.max_rows,
        )


@dataclass
class GridCellDimensions:
    """Pixel geometry of a single grid cell, for drawing grid backgrounds."""

    cell_width: float
    cell_height: float
    offset_x: float
    offset_y: float
    gap_x: float
    gap_y: float
    cols: int
    container_width: float


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp *value* into ``[lower, upper]``."""
    return max(min(value, upper), lower)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's built-in ``round`` uses banker's rounding, which would make
    ``round(2.5) == 2``. Grid math expects ``3``.
    """
    return int(math.floor(value + 0.5))


def calc_grid_col_width(params: PositionParams) -> float:
    """Pixel width of one column."""
    margin_x = params.margin[0]
    padding_x = params.container_padding[0]
    return (
        params.container_width - margin_x * (params.cols - 1) - padding_x * 2
    ) / params.cols


def calc_grid_item_wh_px(grid_units: float, unit_size: float, margin: float) -> float:
    """Pixel extent of *grid_units* cells of *unit_size* separated by *margin*."""
    if not math.isfinite(grid_units):
        return grid_units
    return round_half_up(unit_size * grid_units + max(0, grid_units - 1) * margin)


def calc_grid_item_position(
    params: PositionParams,
    x: int,
    y: int,
    w: int,
    h: int,
    dragging: Position | None = None,
    resizing: Position | None = None,
) -> Position:
    """Pixel position of an item.

    An in-progress drag or resize overrides the computed geometry with
    the pointer-driven pixels so the item tracks the gesture exactly.
    """
    margin_x, margin_y = params.margin
    padding_x, padding_y = params.container_padding
    col_width = calc_grid_col_width(params)

    if resizing is not None:
        width = round_half_up(resizing.width)
        height = round_half_up(resizing.height)
    else:
        width = calc_grid_item_wh_px(w, col_width, margin_x)
        height = calc_grid_item_wh_px(h, params.row_height, margin_y)

    if dragging is not None:
        top = round_half_up(dragging.top)
        left = round_half_up(dragging.left)
    elif resizing is not None:
        top = round_half_up(resizing.top)
        left = round_half_up(resizing.left)
    else:
        top = round_half_up((params.row_height + margin_y) * y + padding_y)
        left = round_half_up((col_width + margin_x) * x + padding_x)

    return Position(left=left, top=top, width=width, height=height)


def calc_xy_raw(params: PositionParams, top: float, left: float) -> tuple[int, int]:
    """Grid (x, y) for a pixel (top, left), without clamping."""
    margin_x, margin_y = params.margin
    padding_x, padding_y = params.container_padding
    col_width = calc_grid_col_width(params)
    x = round_half_up((left - padding_x) / (col_width + margin_x))
    y = round_half_up((top - padding_y) / (params.row_height + margin_y))
    return x, y


def calc_xy(
    params: PositionParams,
    top: float,
    left: float,
    w: int,
    h: int,
) -> tuple[int, int]:
    """Grid (x, y) for a pixel (top, left), kept inside the grid."""
    x, y = calc_xy_raw(params, top, left)
    x = int(clamp(x, 0, max(params.cols - w, 0)))
    y = clamp(y, 0, max(params.max_rows - h, 0))
    return x, int(y)


def calc_wh_raw(params: PositionParams, width: float, height: float) -> tuple[int, int]:
    """Grid (w, h) for a pixel size, without clamping."""
    margin_x, margin_y = params.margin
    col_width = calc_grid_col_width(params)
    w = round_half_up((width + margin_x) / (col_width + margin_x))
    h = round_half_up((height + margin_y) / (params.row_height + margin_y))
    return w, h


def calc_wh(
    params: PositionParams,
    width: float,
    height: float,
    x: int,
    y: int,
    handle: ResizeHandle | str | None = None,
) -> tuple[int, int]:
    """Grid (w, h) for a pixel size, kept inside the grid.

    A west or north handle may grow the item up to the full grid since
    the leading edge moves with it.
    """
    if isinstance(handle, str):
        handle = ResizeHandle(handle)
    w, h = calc_wh_raw(params, width, height)
    out_w = clamp(w, 0, params.cols - x)
    out_h = clamp(h, 0, params.max_rows - y)
    if handle in _WEST_HANDLES:
        out_w = clamp(w, 0, params.cols)
    if handle in _NORTH_HANDLES:
        out_h = clamp(h, 0, params.max_rows)
    return int(out_w), int(out_h)


def calc_grid_cell_dimensions(config: GridConfig) -> GridCellDimensions:
    params = PositionParams.from_config(config)
    padding_x, padding_y = params.container_padding
    return GridCellDimensions(
        cell_width=calc_grid_col_width(params),
        cell_height=params.row_height,
        offset_x=padding_x,
        offset_y=padding_y,
        gap_x=params.margin[0],
        gap_y=params.margin[1],
        cols=params.cols,
        container_width=params.container_width,
    )
