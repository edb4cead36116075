"""Stable item orderings used by compaction and displacement.

Python's sort is stable, so items sharing a sort key keep their layout
order. That order is the tie-break for every collision decision.
"""

from __future__ import annotations

__all__ = [
    "sort_layout_items",
    "sort_layout_items_by_row_col",
    "sort_layout_items_by_col_row",
]

from dashgrid.parser.model import CompactType, Layout


def sort_layout_items_by_row_col(layout: Layout) -> Layout:
    """Sort top-to-bottom, then left-to-right."""
    return sorted(layout, key=lambda item: (item.y, item.x))


def sort_layout_items_by_col_row(layout: Layout) -> Layout:
    """Sort left-to-right, then top-to-bottom."""
    return sorted(layout, key=lambda item: (item.x, item.y))


def sort_layout_items(layout: Layout, compact_type: CompactType) -> Layout:
    """Sort items in the order a compactor of *compact_type* visits them.

    ``NONE`` keeps the layout order unchanged.
    """
    if compact_type is CompactType.HORIZONTAL:
        return sort_layout_items_by_col_row(layout)
    if compact_type is CompactType.VERTICAL:
        return sort_layout_items_by_row_col(layout)
    return list(layout)
