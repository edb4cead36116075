"""Move/resize engine: apply a drag or resize intent to a layout.

The engine produces a collision-consistent layout. It does not remove
gaps; callers pass the result through a compactor afterwards.

Displacement runs as a breadth-first worklist. The placed item is marked
``moved``; every unmoved, non-static item it overlaps is relocated exactly
once to the first free slot beyond it (free of statics and of items
already marked ``moved``), marked, and queued in turn. Each item enters
the queue at most once, so a call does at most ``len(layout)`` rounds.
"""

from __future__ import annotations

__all__ = [
    "move_element",
    "move_element_away_from_collision",
    "resize_element",
    "modify_layout",
    "with_layout_item",
]

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import replace

from dashgrid.layout.bounds import _resolve_append_rows_in_place, bottom
from dashgrid.layout.collision import collides, get_all_collisions
from dashgrid.layout.constants import DEFAULT_COLS
from dashgrid.layout.ordering import sort_layout_items
from dashgrid.parser.model import (
    CompactType,
    Layout,
    LayoutItem,
    ResizeHandle,
    RowSentinel,
    clone_layout,
    get_layout_item,
)

logger = logging.getLogger(__name__)


def _find(layout: Layout, item: LayoutItem | str) -> LayoutItem | None:
    item_id = item if isinstance(item, str) else item.i
    return get_layout_item(layout, item_id)


def _axis(compact_type: CompactType) -> str:
    # Free-form grids displace downward like vertical ones
    return "x" if compact_type is CompactType.HORIZONTAL else "y"


def _first_fixed_collision(layout: Layout, item: LayoutItem) -> LayoutItem | None:
    for other in layout:
        if (other.static or other.moved) and collides(other, item):
            return other
    return None


def _land_beyond(
    layout: Layout,
    item: LayoutItem,
    start_x: int,
    start_y: int,
    axis: str,
    cols: int,
) -> None:
    """Place *item* at the first slot from (start_x, start_y) free of fixed items.

    Vertical search only moves down. Horizontal search moves right and
    wraps to the next row at column 0 when the item would overflow.
    """
    item.x, item.y = start_x, start_y
    while True:
        if axis == "x" and item.x > 0 and item.x + item.w > cols:
            item.x = 0
            item.y += 1
            continue
        blocker = _first_fixed_collision(layout, item)
        if blocker is None:
            return
        if axis == "x":
            item.x = blocker.x + blocker.w
        else:
            item.y = blocker.y + blocker.h


def _try_leading_side(
    layout: Layout,
    mover: LayoutItem,
    other: LayoutItem,
    axis: str,
) -> bool:
    """Put *other* flush against the leading side of *mover* if that spot is empty."""
    if axis == "y":
        probe = replace(other, y=mover.y - other.h)
    else:
        probe = replace(other, x=mover.x - other.w)
    if probe.x < 0 or probe.y < 0:
        return False
    for item in layout:
        if collides(item, probe):
            return False
    other.x, other.y = probe.x, probe.y
    return True


def _displace(
    layout: Layout,
    mover: LayoutItem,
    other: LayoutItem,
    is_user_action: bool,
    compact_type: CompactType,
    cols: int,
) -> None:
    axis = _axis(compact_type)
    if not (is_user_action and _try_leading_side(layout, mover, other, axis)):
        if axis == "y":
            _land_beyond(layout, other, other.x, mover.y + mover.h, axis, cols)
        else:
            _land_beyond(layout, other, mover.x + mover.w, other.y, axis, cols)
    other.moved = True
    logger.debug("Displaced %r to (%d, %d) away from %r", other.i, other.x, other.y, mover.i)


def _run_displacement(
    layout: Layout,
    root: LayoutItem,
    is_user_action: bool,
    compact_type: CompactType,
    cols: int,
) -> None:
    for item in layout:
        item.moved = False
    root.moved = True

    if any(other.static and collides(other, root) for other in layout):
        _land_beyond(layout, root, root.x, root.y, _axis(compact_type), cols)

    queue: deque[tuple[LayoutItem, bool]] = deque([(root, is_user_action)])
    while queue:
        mover, user_level = queue.popleft()
        colliders = sort_layout_items(get_all_collisions(layout, mover), compact_type)
        for other in colliders:
            if other.static or other.moved:
                continue
            _displace(layout, mover, other, user_level, compact_type, cols)
            queue.append((other, False))

    for item in layout:
        item.moved = False


def move_element(
    layout: Layout,
    item: LayoutItem | str,
    x: int | None,
    y: int | RowSentinel | None,
    is_user_action: bool = True,
    prevent_collision: bool = False,
    compact_type: CompactType = CompactType.VERTICAL,
    cols: int = DEFAULT_COLS,
    allow_overlap: bool = False,
) -> Layout:
    """Return a copy of *layout* with *item* moved to (x, y).

    ``None`` for a coordinate keeps the current value. Static items and
    unknown ids leave the layout unchanged. With *prevent_collision* a
    move onto an occupied box is rejected; with *allow_overlap* the item
    is placed and nothing is displaced. Otherwise overlapped items are
    pushed along the compaction axis, cascading as needed.
    """
    out = clone_layout(layout)
    _resolve_append_rows_in_place(out)

    target = _find(out, item)
    if target is None:
        logger.debug("move_element: no item %r in layout", item)
        return out
    if target.static:
        return out

    new_x = target.x if x is None else x
    if y is None:
        new_y = target.y
    elif isinstance(y, RowSentinel):
        new_y = bottom([other for other in out if other.i != target.i])
    else:
        new_y = y
    new_x = min(max(new_x, 0), max(cols - target.w, 0))
    new_y = max(new_y, 0)

    if (new_x, new_y) == (target.x, target.y):
        return out

    old_x, old_y = target.x, target.y
    target.x, target.y = new_x, new_y

    collisions = get_all_collisions(out, target)
    if collisions and allow_overlap:
        return out
    if collisions and prevent_collision:
        target.x, target.y = old_x, old_y
        logger.debug("move_element: %r blocked by %r", target.i, collisions[0].i)
        return out

    _run_displacement(out, target, is_user_action, compact_type, cols)
    return out


def move_element_away_from_collision(
    layout: Layout,
    collides_with: LayoutItem | str,
    item_to_move: LayoutItem | str,
    is_user_action: bool = False,
    compact_type: CompactType = CompactType.VERTICAL,
    cols: int = DEFAULT_COLS,
) -> Layout:
    """Return a copy of *layout* with *item_to_move* pushed past *collides_with*.

    This is a single displacement step: only *item_to_move* changes.
    Static items are never moved.
    """
    out = clone_layout(layout)
    _resolve_append_rows_in_place(out)
    mover = _find(out, collides_with)
    other = _find(out, item_to_move)
    if mover is None or other is None or other.static:
        return out
    if not collides(mover, other):
        return out
    mover.moved = True
    _displace(out, mover, other, is_user_action, compact_type, cols)
    for item in out:
        item.moved = False
    return out


def _clamp_size(value: int, lower: int | None, upper: int | None) -> int:
    value = max(value, lower if lower is not None else 1, 1)
    if upper is not None:
        value = min(value, upper)
    return max(value, 1)


def resize_element(
    layout: Layout,
    item: LayoutItem | str,
    w: int,
    h: int,
    x: int | None = None,
    y: int | None = None,
    handle: ResizeHandle | str | None = None,
    prevent_collision: bool = False,
    compact_type: CompactType = CompactType.VERTICAL,
    cols: int = DEFAULT_COLS,
    allow_overlap: bool = False,
) -> Layout:
    """Return a copy of *layout* with *item* resized to (w, h).

    The size is clamped to the item's min/max bounds. When *handle*
    moves a leading edge (west or north) and no explicit *x*/*y* is
    given, the position shifts so the opposite edge stays put.

    A resize that is blocked (by *prevent_collision*, or by a static
    item under the new footprint) reverts both the size and any
    position shift.
    """
    out = clone_layout(layout)
    _resolve_append_rows_in_place(out)

    target = _find(out, item)
    if target is None:
        logger.debug("resize_element: no item %r in layout", item)
        return out
    if target.static:
        return out

    if isinstance(handle, str):
        handle = ResizeHandle(handle)
    west = handle is not None and handle.affects_west
    north = handle is not None and handle.affects_north

    new_w = min(_clamp_size(w, target.min_w, target.max_w), max(cols, 1))
    new_h = _clamp_size(h, target.min_h, target.max_h)
    if x is None:
        x = target.x + target.w - new_w if west else target.x
    if y is None:
        y = target.y + target.h - new_h if north else target.y

    if x < 0:
        if west:
            new_w = max(new_w + x, 1)
        x = 0
    if x + new_w > cols:
        if west:
            x = max(cols - new_w, 0)
        else:
            new_w = max(cols - x, 1)
    if y < 0:
        if north:
            new_h = max(new_h + y, 1)
        y = 0

    old = (target.x, target.y, target.w, target.h)
    if (x, y, new_w, new_h) == old:
        return out

    target.x, target.y, target.w, target.h = x, y, new_w, new_h

    collisions = get_all_collisions(out, target)
    if collisions and allow_overlap:
        return out
    if collisions and (prevent_collision or any(c.static for c in collisions)):
        target.x, target.y, target.w, target.h = old
        logger.debug("resize_element: %r blocked by %r", target.i, collisions[0].i)
        return out

    _run_displacement(out, target, False, compact_type, cols)
    return out


def modify_layout(layout: Layout, item: LayoutItem) -> Layout:
    """Return a copy of *layout* with the item sharing *item*'s id replaced."""
    return [item.clone() if other.i == item.i else other.clone() for other in layout]


def with_layout_item(
    layout: Layout,
    item_id: str,
    fn: Callable[[LayoutItem], LayoutItem],
) -> tuple[Layout, LayoutItem | None]:
    """Apply *fn* to a copy of the item with *item_id*.

    Returns the new layout and the updated item, or the unchanged layout
    and None when the id is unknown.
    """
    current = get_layout_item(layout, item_id)
    if current is None:
        return clone_layout(layout), None
    updated = fn(current.clone())
    return modify_layout(layout, updated), updated
