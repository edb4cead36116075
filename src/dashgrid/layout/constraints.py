"""Constraint pipeline for proposed positions and sizes.

A constraint may adjust a proposed position, a proposed size, or both.
Constraints run left to right, each seeing the previous one's output.
The interaction boundary applies them before coordinates reach the
move/resize engine.
"""

from __future__ import annotations

__all__ = [
    "ConstraintContext",
    "LayoutConstraint",
    "grid_bounds",
    "min_max_size",
    "container_bounds",
    "bounded_x",
    "bounded_y",
    "aspect_ratio",
    "snap_to_grid",
    "min_size",
    "max_size",
    "DEFAULT_CONSTRAINTS",
    "apply_position_constraints",
    "apply_size_constraints",
]

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from dashgrid.layout.calculate import (
    PositionParams,
    calc_grid_col_width,
    clamp,
    round_half_up,
)
from dashgrid.layout.constants import (
    DEFAULT_COLS,
    DEFAULT_CONTAINER_WIDTH,
    DEFAULT_MARGIN,
    DEFAULT_MAX_ROWS,
    DEFAULT_ROW_HEIGHT,
)
from dashgrid.parser.model import Layout, LayoutItem, ResizeHandle


@dataclass
class ConstraintContext:
    """Grid geometry visible to constraints."""

    cols: int = DEFAULT_COLS
    max_rows: float = DEFAULT_MAX_ROWS
    container_width: float = DEFAULT_CONTAINER_WIDTH
    container_height: float = 0.0
    row_height: float = DEFAULT_ROW_HEIGHT
    margin: tuple[float, float] = DEFAULT_MARGIN
    layout: Layout = field(default_factory=list)


PositionFn = Callable[[LayoutItem, int, int, ConstraintContext], tuple[int, int]]
SizeFn = Callable[
    [LayoutItem, int, int, ResizeHandle | None, ConstraintContext], tuple[int, int]
]


@dataclass(frozen=True)
class LayoutConstraint:
    name: str
    constrain_position: PositionFn | None = None
    constrain_size: SizeFn | None = None


def _int(value: float) -> int:
    return int(value) if math.isfinite(value) else value


def _is_west(handle: ResizeHandle | None) -> bool:
    return handle is not None and handle.affects_west


def _is_north(handle: ResizeHandle | None) -> bool:
    return handle is not None and handle.affects_north


# ---------------------------------------------------------------------------
# Built-in constraints
# ---------------------------------------------------------------------------


def _grid_bounds_position(item, x, y, ctx):
    return (
        int(clamp(x, 0, max(0, ctx.cols - item.w))),
        _int(clamp(y, 0, max(0, ctx.max_rows - item.h))),
    )


def _grid_bounds_size(item, w, h, handle, ctx):
    # A leading-edge handle can grow up to the far edge it is anchored to
    max_w = item.x + item.w if _is_west(handle) else ctx.cols - item.x
    max_h = item.y + item.h if _is_north(handle) else ctx.max_rows - item.y
    return int(clamp(w, 1, max(1, max_w))), _int(clamp(h, 1, max(1, max_h)))


grid_bounds = LayoutConstraint(
    "gridBounds",
    constrain_position=_grid_bounds_position,
    constrain_size=_grid_bounds_size,
)


def _min_max_size(item, w, h, handle, ctx):
    min_w = item.min_w if item.min_w is not None else 1
    min_h = item.min_h if item.min_h is not None else 1
    max_w = item.max_w if item.max_w is not None else math.inf
    max_h = item.max_h if item.max_h is not None else math.inf
    return _int(clamp(w, min_w, max_w)), _int(clamp(h, min_h, max_h))


min_max_size = LayoutConstraint("minMaxSize", constrain_size=_min_max_size)


def _container_bounds_position(item, x, y, ctx):
    if ctx.container_height > 0:
        visible_rows = math.floor(
            (ctx.container_height + ctx.margin[1]) / (ctx.row_height + ctx.margin[1])
        )
    else:
        visible_rows = ctx.max_rows
    return (
        int(clamp(x, 0, max(0, ctx.cols - item.w))),
        _int(clamp(y, 0, max(0, visible_rows - item.h))),
    )


container_bounds = LayoutConstraint(
    "containerBounds", constrain_position=_container_bounds_position
)

bounded_x = LayoutConstraint(
    "boundedX",
    constrain_position=lambda item, x, y, ctx: (
        int(clamp(x, 0, max(0, ctx.cols - item.w))),
        y,
    ),
)

bounded_y = LayoutConstraint(
    "boundedY",
    constrain_position=lambda item, x, y, ctx: (
        x,
        _int(clamp(y, 0, max(0, ctx.max_rows - item.h))),
    ),
)


# ---------------------------------------------------------------------------
# Constraint factories
# ---------------------------------------------------------------------------


def aspect_ratio(ratio: float) -> LayoutConstraint:
    """Lock width / height (in pixels) to *ratio*.

    Dragging a north or south edge derives the width from the height;
    every other handle derives the height from the width.
    """
    if ratio <= 0:
        raise ValueError(f"aspect ratio must be positive, got {ratio}")

    def constrain(item, w, h, handle, ctx):
        params = PositionParams(
            margin=ctx.margin,
            container_padding=(0.0, 0.0),
            container_width=ctx.container_width,
            cols=ctx.cols,
            row_height=ctx.row_height,
        )
        col_width = calc_grid_col_width(params)
        margin_x, margin_y = ctx.margin
        if handle in (ResizeHandle.N, ResizeHandle.S):
            pixel_height = ctx.row_height * h + margin_y * max(0, h - 1)
            pixel_width = pixel_height * ratio
            cols = max(1, round_half_up((pixel_width + margin_x) / (col_width + margin_x)))
            return cols, h
        pixel_width = col_width * w + margin_x * max(0, w - 1)
        pixel_height = pixel_width / ratio
        rows = max(1, round_half_up((pixel_height + margin_y) / (ctx.row_height + margin_y)))
        return w, rows

    return LayoutConstraint(f"aspectRatio({ratio})", constrain_size=constrain)


def snap_to_grid(step_x: int, step_y: int | None = None) -> LayoutConstraint:
    """Round positions to multiples of (step_x, step_y)."""
    if step_y is None:
        step_y = step_x
    if step_x <= 0 or step_y <= 0:
        raise ValueError("snap steps must be positive")

    def constrain(item, x, y, ctx):
        return round_half_up(x / step_x) * step_x, round_half_up(y / step_y) * step_y

    return LayoutConstraint(
        f"snapToGrid({step_x}, {step_y})", constrain_position=constrain
    )


def min_size(min_w: int, min_h: int) -> LayoutConstraint:
    return LayoutConstraint(
        f"minSize({min_w}, {min_h})",
        constrain_size=lambda item, w, h, handle, ctx: (max(w, min_w), max(h, min_h)),
    )


def max_size(max_w: int, max_h: int) -> LayoutConstraint:
    return LayoutConstraint(
        f"maxSize({max_w}, {max_h})",
        constrain_size=lambda item, w, h, handle, ctx: (min(w, max_w), min(h, max_h)),
    )


DEFAULT_CONSTRAINTS: tuple[LayoutConstraint, ...] = (grid_bounds, min_max_size)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def apply_position_constraints(
    constraints: Sequence[LayoutConstraint],
    item: LayoutItem,
    x: int,
    y: int,
    context: ConstraintContext,
) -> tuple[int, int]:
    """Run every position constraint in order and return the final (x, y)."""
    for constraint in constraints:
        if constraint.constrain_position is not None:
            x, y = constraint.constrain_position(item, x, y, context)
    return x, y


def apply_size_constraints(
    constraints: Sequence[LayoutConstraint],
    item: LayoutItem,
    w: int,
    h: int,
    handle: ResizeHandle | str | None,
    context: ConstraintContext,
) -> tuple[int, int]:
    """Run every size constraint in order and return the final (w, h)."""
    if isinstance(handle, str):
        handle = ResizeHandle(handle)
    for constraint in constraints:
        if constraint.constrain_size is not None:
            w, h = constraint.constrain_size(item, w, h, handle, context)
    return w, h
