"""Layout engine: collision, compaction, movement, bounds and responsive helpers."""

from dashgrid.layout.bounds import bottom, correct_bounds
from dashgrid.layout.collision import collides, get_all_collisions, get_first_collision
from dashgrid.layout.compactors import Compactor, compact, get_compactor
from dashgrid.layout.engine import move_element, resize_element
from dashgrid.layout.responsive import (
    BreakpointConfigError,
    ResponsiveGrid,
    find_or_generate_responsive_layout,
    get_breakpoint_from_width,
)
from dashgrid.layout.session import GridSession

__all__ = [
    "BreakpointConfigError",
    "Compactor",
    "GridSession",
    "ResponsiveGrid",
    "bottom",
    "collides",
    "compact",
    "correct_bounds",
    "find_or_generate_responsive_layout",
    "get_all_collisions",
    "get_breakpoint_from_width",
    "get_compactor",
    "get_first_collision",
    "move_element",
    "resize_element",
]
