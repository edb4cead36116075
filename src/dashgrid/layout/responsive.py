"""Responsive breakpoints: pick and derive a layout per viewport width.

Breakpoints map a name to a minimum container width. A stored layout
for the active breakpoint is used as-is (after bounds correction and
compaction); otherwise one is derived from the previously active
breakpoint by scaling x and w to the new column count.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from dashgrid.layout.bounds import correct_bounds
from dashgrid.layout.calculate import round_half_up
from dashgrid.layout.compactors import VERTICAL_COMPACTOR, Compactor
from dashgrid.layout.constants import DEFAULT_BREAKPOINT_COLS, DEFAULT_BREAKPOINTS
from dashgrid.parser.model import Layout, clone_layout

logger = logging.getLogger(__name__)


class BreakpointConfigError(ValueError):
    """The breakpoint or column table cannot yield a column count."""


def sort_breakpoints(breakpoints: Mapping[str, int]) -> list[str]:
    """Return breakpoint names from the narrowest to the widest."""
    if not breakpoints:
        raise BreakpointConfigError("No breakpoints defined")
    return sorted(breakpoints, key=lambda name: breakpoints[name])


def get_breakpoint_from_width(breakpoints: Mapping[str, int], width: float) -> str:
    """Return the widest breakpoint whose minimum width is <= *width*.

    Widths narrower than every breakpoint fall back to the narrowest.
    """
    ordered = sort_breakpoints(breakpoints)
    matching = ordered[0]
    for name in ordered:
        if breakpoints[name] <= width:
            matching = name
    return matching


def get_cols_from_breakpoint(breakpoint: str, cols: Mapping[str, int]) -> int:
    value = cols.get(breakpoint)
    if value is None:
        raise BreakpointConfigError(
            f"Column count for breakpoint '{breakpoint}' is missing"
        )
    if value < 1:
        raise BreakpointConfigError(
            f"Column count for breakpoint '{breakpoint}' must be >= 1, got {value}"
        )
    return value


def scale_layout(layout: Layout, old_cols: int, new_cols: int) -> Layout:
    """Scale x and w of every item from *old_cols* to *new_cols* columns.

    Rows and heights are untouched. Each width is kept in ``[1, new_cols]``
    and each x in ``[0, new_cols - w]``.
    """
    out = clone_layout(layout)
    if old_cols == new_cols or old_cols <= 0:
        return out
    ratio = new_cols / old_cols
    for item in out:
        item.w = min(max(round_half_up(item.w * ratio), 1), new_cols)
        item.x = min(max(round_half_up(item.x * ratio), 0), new_cols - item.w)
    return out


def _source_breakpoint(
    layouts: Mapping[str, Layout],
    breakpoints: Mapping[str, int],
    breakpoint: str,
    last_breakpoint: str | None,
) -> str | None:
    if last_breakpoint is not None and last_breakpoint in layouts:
        return last_breakpoint
    ordered = sort_breakpoints(breakpoints)
    if breakpoint not in ordered:
        return next((name for name in ordered if name in layouts), None)
    index = ordered.index(breakpoint)
    # Nearest wider breakpoint first, then the nearest narrower one
    for name in ordered[index:] + ordered[:index][::-1]:
        if name in layouts:
            return name
    return None


def find_or_generate_responsive_layout(
    layouts: Mapping[str, Layout],
    breakpoints: Mapping[str, int],
    breakpoint: str,
    last_breakpoint: str | None,
    cols: int,
    compactor: Compactor = VERTICAL_COMPACTOR,
    breakpoint_cols: Mapping[str, int] | None = None,
) -> Layout:
    """Return the layout for *breakpoint*, generating it when none is stored.

    Generation scales the source layout when *breakpoint_cols* knows the
    source breakpoint's column count; otherwise the source is only
    bounds-corrected into *cols*.
    """
    if not breakpoints:
        raise BreakpointConfigError("No breakpoints defined")

    stored = layouts.get(breakpoint)
    if stored is not None:
        return compactor.compact(correct_bounds(stored, cols), cols)

    source_name = _source_breakpoint(layouts, breakpoints, breakpoint, last_breakpoint)
    if source_name is None:
        return []

    source = layouts[source_name]
    if breakpoint_cols is not None and source_name in breakpoint_cols:
        source = scale_layout(source, breakpoint_cols[source_name], cols)
    logger.debug(
        "Generated layout for breakpoint %r from %r (%d items)",
        breakpoint,
        source_name,
        len(source),
    )
    return compactor.compact(correct_bounds(source, cols), cols)


def get_indentation_value(
    value: tuple[float, float] | Mapping[str, tuple[float, float]] | None,
    breakpoint: str,
) -> tuple[float, float] | None:
    """Resolve a margin or padding that may be given per breakpoint."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value.get(breakpoint)
    return value


@dataclass(frozen=True)
class ResponsiveGrid:
    """Immutable responsive state: active breakpoint, columns and layouts.

    Every update returns a new value, so a host can keep the previous
    one for diffing.
    """

    breakpoints: Mapping[str, int]
    breakpoint_cols: Mapping[str, int]
    width: float
    breakpoint: str
    cols: int
    layouts: Mapping[str, Layout] = field(default_factory=dict)
    compactor: Compactor = VERTICAL_COMPACTOR

    @classmethod
    def create(
        cls,
        width: float,
        layouts: Mapping[str, Layout] | None = None,
        breakpoints: Mapping[str, int] = DEFAULT_BREAKPOINTS,
        breakpoint_cols: Mapping[str, int] = DEFAULT_BREAKPOINT_COLS,
        compactor: Compactor = VERTICAL_COMPACTOR,
    ) -> ResponsiveGrid:
        for name in sort_breakpoints(breakpoints):
            get_cols_from_breakpoint(name, breakpoint_cols)
        breakpoint = get_breakpoint_from_width(breakpoints, width)
        return cls(
            breakpoints=dict(breakpoints),
            breakpoint_cols=dict(breakpoint_cols),
            width=width,
            breakpoint=breakpoint,
            cols=breakpoint_cols[breakpoint],
            layouts={name: clone_layout(lay) for name, lay in (layouts or {}).items()},
            compactor=compactor,
        )

    @property
    def sorted_breakpoints(self) -> list[str]:
        return sort_breakpoints(self.breakpoints)

    @property
    def layout(self) -> Layout:
        """Layout for the active breakpoint."""
        return find_or_generate_responsive_layout(
            self.layouts,
            self.breakpoints,
            self.breakpoint,
            self.breakpoint,
            self.cols,
            self.compactor,
            self.breakpoint_cols,
        )

    def with_width(self, width: float) -> ResponsiveGrid:
        """Return the state for a new container width.

        Crossing into another breakpoint stores the resolved layout for
        it, so later width changes reuse it.
        """
        if width == self.width:
            return self
        breakpoint = get_breakpoint_from_width(self.breakpoints, width)
        if breakpoint == self.breakpoint:
            return replace(self, width=width)

        cols = get_cols_from_breakpoint(breakpoint, self.breakpoint_cols)
        layout = find_or_generate_responsive_layout(
            self.layouts,
            self.breakpoints,
            breakpoint,
            self.breakpoint,
            cols,
            self.compactor,
            self.breakpoint_cols,
        )
        logger.debug(
            "Breakpoint %r -> %r at width %s (%d cols)",
            self.breakpoint,
            breakpoint,
            width,
            cols,
        )
        return replace(
            self,
            width=width,
            breakpoint=breakpoint,
            cols=cols,
            layouts={**self.layouts, breakpoint: layout},
        )

    def with_layout(self, breakpoint: str, layout: Layout) -> ResponsiveGrid:
        """Store *layout* for *breakpoint*."""
        return replace(self, layouts={**self.layouts, breakpoint: clone_layout(layout)})

    def with_layouts(self, layouts: Mapping[str, Layout]) -> ResponsiveGrid:
        """Replace every stored layout."""
        return replace(
            self, layouts={name: clone_layout(lay) for name, lay in layouts.items()}
        )
