"""Layout builders and invariant checks shared by the engine tests."""

from __future__ import annotations

import random

from dashgrid.layout.collision import collides
from dashgrid.parser.model import Layout, LayoutItem


def item(i: str, x: int, y: int, w: int, h: int, **kwargs) -> LayoutItem:
    return LayoutItem(i=i, x=x, y=y, w=w, h=h, **kwargs)


def geometry(layout: Layout) -> dict[str, tuple[int, int, int, int]]:
    """Map id -> (x, y, w, h)."""
    return {it.i: (it.x, it.y, it.w, it.h) for it in layout}


def overlapping_pairs(layout: Layout) -> list[tuple[str, str]]:
    pairs = []
    for index, a in enumerate(layout):
        for b in layout[index + 1 :]:
            if collides(a, b):
                pairs.append((a.i, b.i))
    return pairs


def out_of_bounds(layout: Layout, cols: int) -> list[str]:
    return [it.i for it in layout if it.x < 0 or it.x + it.w > cols]


def random_layout(
    seed: int,
    cols: int = 12,
    count: int = 12,
    statics: int = 2,
    max_w: int = 5,
    max_h: int = 4,
    max_y: int = 20,
) -> Layout:
    """Build a reproducible layout.

    Static items never overlap each other; movable items may overlap
    anything, like a layout fresh from a host before normalization.
    """
    rng = random.Random(seed)
    layout: Layout = []
    attempts = 0
    while len(layout) < statics and attempts < 200:
        attempts += 1
        w = rng.randint(1, min(max_w, cols))
        candidate = item(
            f"s{len(layout)}",
            rng.randint(0, cols - w),
            rng.randint(0, max_y),
            w,
            rng.randint(1, max_h),
            static=True,
        )
        if not any(collides(candidate, other) for other in layout):
            layout.append(candidate)

    for n in range(count):
        w = rng.randint(1, min(max_w, cols))
        layout.append(
            item(
                f"m{n}",
                rng.randint(0, cols - w),
                rng.randint(0, max_y),
                w,
                rng.randint(1, max_h),
            )
        )

    rng.shuffle(layout)
    return layout
