"""Compaction strategies: remove gaps along one axis.

A compactor is a tagged value. The six built-ins are looked up in a
dispatch table keyed by ``(CompactType, allow_overlap)``; a custom
strategy is any ``Compactor`` wrapping a ``(layout, cols) -> Layout``
callable.
"""

from __future__ import annotations

__all__ = [
    "CompactType",
    "Compactor",
    "compact",
    "compact_item_vertical",
    "compact_item_horizontal",
    "resolve_compaction_collision",
    "get_compactor",
    "VERTICAL_COMPACTOR",
    "HORIZONTAL_COMPACTOR",
    "NO_COMPACTOR",
    "VERTICAL_OVERLAP_COMPACTOR",
    "HORIZONTAL_OVERLAP_COMPACTOR",
    "NO_OVERLAP_COMPACTOR",
]

from collections.abc import Callable
from dataclasses import dataclass

from dashgrid.layout.bounds import _resolve_append_rows_in_place, bottom
from dashgrid.layout.collision import collides, get_first_collision
from dashgrid.layout.constants import DEFAULT_COLS
from dashgrid.layout.ordering import sort_layout_items
from dashgrid.parser.model import (
    CompactType,
    Layout,
    LayoutItem,
    clone_layout,
    get_statics,
)


@dataclass(frozen=True)
class Compactor:
    """A compaction strategy.

    ``type`` also tells the move/resize engine which axis to displace
    colliding items along.
    """

    type: CompactType
    allow_overlap: bool
    compact: Callable[[Layout, int], Layout]
    name: str = ""

    def __call__(self, layout: Layout, cols: int = DEFAULT_COLS) -> Layout:
        return self.compact(layout, cols)


def resolve_compaction_collision(
    layout: Layout,
    item: LayoutItem,
    move_to: int,
    axis: str,
) -> None:
    """Move *item* to *move_to* on *axis*, pushing later items out of the way.

    *layout* must be in compaction order. Only items after *item* are
    touched, so the recursion depth is bounded by the layout length.
    """
    size_attr = "h" if axis == "y" else "w"
    setattr(item, axis, getattr(item, axis) + 1)

    ids = [other.i for other in layout]
    index = ids.index(item.i)
    for other in layout[index + 1 :]:
        if other.static:
            continue
        if axis == "y" and other.y > item.y + item.h:
            break
        if axis == "x" and other.x > item.x + item.w:
            break
        if collides(item, other):
            resolve_compaction_collision(
                layout, other, move_to + getattr(item, size_attr), axis
            )

    setattr(item, axis, move_to)


def compact_item_vertical(
    compare_with: Layout,
    item: LayoutItem,
    full_layout: Layout,
) -> LayoutItem:
    """Pull *item* up until it rests on a placed item or row 0."""
    item.y = min(bottom(compare_with), item.y)
    while item.y > 0 and get_first_collision(compare_with, item) is None:
        item.y -= 1

    while (collision := get_first_collision(compare_with, item)) is not None:
        resolve_compaction_collision(
            full_layout, item, collision.y + collision.h, "y"
        )

    item.y = max(item.y, 0)
    item.x = max(item.x, 0)
    return item


def _slide_left(compare_with: Layout, item: LayoutItem) -> None:
    while item.x > 0 and get_first_collision(compare_with, item) is None:
        item.x -= 1


def compact_item_horizontal(
    compare_with: Layout,
    item: LayoutItem,
    full_layout: Layout,
    cols: int,
) -> LayoutItem:
    """Pull *item* left, wrapping to the next row when it overflows."""
    _slide_left(compare_with, item)

    while True:
        collision = get_first_collision(compare_with, item)
        if collision is not None:
            resolve_compaction_collision(
                full_layout, item, collision.x + collision.w, "x"
            )
            if item.x + item.w > cols:
                item.x = max(cols - item.w, 0)
                item.y += 1
                _slide_left(compare_with, item)
        elif item.x > 0 and item.x + item.w > cols:
            # Pushed past the last column by an earlier item
            item.x = max(cols - item.w, 0)
            _slide_left(compare_with, item)
        else:
            break

    item.y = max(item.y, 0)
    item.x = max(item.x, 0)
    return item


def compact(
    layout: Layout,
    compact_type: CompactType,
    cols: int = DEFAULT_COLS,
    allow_overlap: bool = False,
) -> Layout:
    """Return a compacted copy of *layout*, keeping its item order.

    Static items are never moved but seed the obstacle list, so movable
    items settle against them.
    """
    out = clone_layout(layout)
    _resolve_append_rows_in_place(out)

    if compact_type is CompactType.NONE:
        for item in out:
            item.moved = False
        return out

    if allow_overlap:
        return _clamp_to_axis(out, compact_type, cols)

    compare_with = get_statics(out)
    sorted_items = sort_layout_items(out, compact_type)
    for item in sorted_items:
        if not item.static:
            if compact_type is CompactType.HORIZONTAL:
                compact_item_horizontal(compare_with, item, sorted_items, cols)
            else:
                compact_item_vertical(compare_with, item, sorted_items)
            compare_with.append(item)
        item.moved = False

    return out


def _clamp_to_axis(layout: Layout, compact_type: CompactType, cols: int) -> Layout:
    for item in layout:
        item.moved = False
        if item.static:
            continue
        if compact_type is CompactType.HORIZONTAL:
            item.x = min(max(item.x, 0), max(cols - item.w, 0))
        else:
            item.y = max(item.y, 0)
    return layout


def _vertical(layout: Layout, cols: int = DEFAULT_COLS) -> Layout:
    return compact(layout, CompactType.VERTICAL, cols)


def _horizontal(layout: Layout, cols: int = DEFAULT_COLS) -> Layout:
    return compact(layout, CompactType.HORIZONTAL, cols)


def _none(layout: Layout, cols: int = DEFAULT_COLS) -> Layout:
    return compact(layout, CompactType.NONE, cols)


def _vertical_overlap(layout: Layout, cols: int = DEFAULT_COLS) -> Layout:
    return compact(layout, CompactType.VERTICAL, cols, allow_overlap=True)


def _horizontal_overlap(layout: Layout, cols: int = DEFAULT_COLS) -> Layout:
    return compact(layout, CompactType.HORIZONTAL, cols, allow_overlap=True)


def _none_overlap(layout: Layout, cols: int = DEFAULT_COLS) -> Layout:
    return compact(layout, CompactType.NONE, cols, allow_overlap=True)


VERTICAL_COMPACTOR = Compactor(CompactType.VERTICAL, False, _vertical, "vertical")
HORIZONTAL_COMPACTOR = Compactor(
    CompactType.HORIZONTAL, False, _horizontal, "horizontal"
)
NO_COMPACTOR = Compactor(CompactType.NONE, False, _none, "none")
VERTICAL_OVERLAP_COMPACTOR = Compactor(
    CompactType.VERTICAL, True, _vertical_overlap, "vertical-overlap"
)
HORIZONTAL_OVERLAP_COMPACTOR = Compactor(
    CompactType.HORIZONTAL, True, _horizontal_overlap, "horizontal-overlap"
)
NO_OVERLAP_COMPACTOR = Compactor(CompactType.NONE, True, _none_overlap, "none-overlap")

COMPACTORS: dict[tuple[CompactType, bool], Compactor] = {
    (c.type, c.allow_overlap): c
    for c in (
        VERTICAL_COMPACTOR,
        HORIZONTAL_COMPACTOR,
        NO_COMPACTOR,
        VERTICAL_OVERLAP_COMPACTOR,
        HORIZONTAL_OVERLAP_COMPACTOR,
        NO_OVERLAP_COMPACTOR,
    )
}


def get_compactor(
    compact_type: CompactType | str | None,
    allow_overlap: bool = False,
) -> Compactor:
    """Look up a built-in compactor.

    Accepts the enum, its string value, or None (meaning ``NONE``).
    """
    if compact_type is None:
        compact_type = CompactType.NONE
    elif isinstance(compact_type, str):
        compact_type = CompactType(compact_type)
    return COMPACTORS[(compact_type, allow_overlap)]
