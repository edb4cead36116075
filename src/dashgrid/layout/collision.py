"""Collision detection between layout items.

Boxes are half-open intervals ``[x, x + w) x [y, y + h)`` so items that
merely share an edge never collide.
"""

from __future__ import annotations

__all__ = ["collides", "get_first_collision", "get_all_collisions"]

from dashgrid.parser.model import Layout, LayoutItem


def collides(a: LayoutItem, b: LayoutItem) -> bool:
    """Return True when the boxes of *a* and *b* overlap."""
    if a.i == b.i:
        return False
    if a.w <= 0 or a.h <= 0 or b.w <= 0 or b.h <= 0:
        return False
    if a.x + a.w <= b.x:
        return False
    if a.x >= b.x + b.w:
        return False
    if a.y + a.h <= b.y:
        return False
    if a.y >= b.y + b.h:
        return False
    return True


def get_first_collision(layout: Layout, item: LayoutItem) -> LayoutItem | None:
    """Return the first item in layout order that overlaps *item*."""
    for other in layout:
        if collides(other, item):
            return other
    return None


def get_all_collisions(layout: Layout, item: LayoutItem) -> Layout:
    return [other for other in layout if collides(other, item)]
