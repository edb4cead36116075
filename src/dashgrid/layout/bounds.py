"""Bounds correction: clamp items into the valid column range.

Static items are corrected against the grid edges only. They are never
relocated because of other items occupying their cells.
"""

from __future__ import annotations

__all__ = ["bottom", "resolve_append_rows", "correct_bounds"]

import logging

from dashgrid.layout.constants import DEFAULT_COLS
from dashgrid.parser.model import Layout, RowSentinel, clone_layout

logger = logging.getLogger(__name__)


def bottom(layout: Layout) -> int:
    """Return the first row below every placed item (0 for an empty layout).

    Items whose row is still a sentinel are ignored.
    """
    max_y = 0
    for item in layout:
        if isinstance(item.y, RowSentinel):
            continue
        max_y = max(max_y, item.y + item.h)
    return max_y


def _resolve_append_rows_in_place(layout: Layout) -> None:
    pending = [item for item in layout if isinstance(item.y, RowSentinel)]
    if not pending:
        return
    row = bottom(layout)
    for item in pending:
        item.y = row
        row += max(item.h, 1)
    logger.debug("Appended %d item(s) at the bottom of the layout", len(pending))


def resolve_append_rows(layout: Layout) -> Layout:
    """Replace every ``APPEND_BOTTOM`` row with a concrete row.

    Pending items stack below the placed ones in layout order.
    """
    out = clone_layout(layout)
    _resolve_append_rows_in_place(out)
    return out


def _correct_item_in_place(item, cols: int) -> None:
    # w and h below one are treated as one
    item.w = min(max(item.w, 1), max(cols, 1))
    item.h = max(item.h, 1)
    if item.x + item.w > cols:
        item.x = cols - item.w
    item.x = max(item.x, 0)
    item.y = max(item.y, 0)


def correct_bounds(layout: Layout, cols: int = DEFAULT_COLS) -> Layout:
    """Return a copy of *layout* with every item inside ``[0, cols)``.

    ``x`` is shifted left before ``w`` is shrunk, so an item keeps its
    size whenever it fits in the grid at all.
    """
    out = clone_layout(layout)
    _resolve_append_rows_in_place(out)
    for item in out:
        _correct_item_in_place(item, cols)
    return out
