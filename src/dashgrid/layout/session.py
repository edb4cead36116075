"""Interaction state for drag, resize and external drop gestures.

``GridSession`` is an immutable value. Each gesture callback returns a
new session holding the next layout snapshot; the previous session is
left untouched so the host can diff or roll back.

The gesture layer converts pointer pixels to grid units (see
``dashgrid.layout.calculate``) before calling in here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from dashgrid.layout.bounds import bottom, correct_bounds
from dashgrid.layout.compactors import VERTICAL_COMPACTOR, Compactor
from dashgrid.layout.constants import (
    DEFAULT_COLS,
    DEFAULT_DROPPING_SIZE,
    DROPPING_ITEM_ID,
)
from dashgrid.layout.constraints import (
    DEFAULT_CONSTRAINTS,
    ConstraintContext,
    LayoutConstraint,
    apply_position_constraints,
    apply_size_constraints,
)
from dashgrid.layout.engine import move_element, resize_element
from dashgrid.parser.model import (
    DroppingPosition,
    Layout,
    LayoutItem,
    ResizeHandle,
    clone_layout,
    get_layout_item,
)

logger = logging.getLogger(__name__)


def dropping_placeholder(
    x: int, y: int, size: tuple[int, int] = DEFAULT_DROPPING_SIZE
) -> LayoutItem:
    """Build the placeholder item shown while an external item hovers."""
    w, h = size
    return LayoutItem(i=DROPPING_ITEM_ID, x=x, y=y, w=w, h=h)


@dataclass(frozen=True)
class DragState:
    # Placeholder shown under the pointer; never part of the layout
    active_drag: LayoutItem
    old_drag_item: LayoutItem
    old_layout: Layout


@dataclass(frozen=True)
class ResizeState:
    old_resize_item: LayoutItem
    old_layout: Layout
    handle: ResizeHandle | None = None


@dataclass(frozen=True)
class GridSession:
    layout: Layout
    cols: int = DEFAULT_COLS
    compactor: Compactor = VERTICAL_COMPACTOR
    prevent_collision: bool = False
    constraints: tuple[LayoutConstraint, ...] = DEFAULT_CONSTRAINTS
    drag_state: DragState | None = None
    resize_state: ResizeState | None = None
    dropping_position: DroppingPosition | None = None

    @classmethod
    def create(
        cls,
        layout: Layout,
        cols: int = DEFAULT_COLS,
        compactor: Compactor = VERTICAL_COMPACTOR,
        prevent_collision: bool = False,
        constraints: Sequence[LayoutConstraint] = DEFAULT_CONSTRAINTS,
    ) -> GridSession:
        """Start a session from a host layout, normalizing it first."""
        return cls(
            layout=compactor.compact(correct_bounds(layout, cols), cols),
            cols=cols,
            compactor=compactor,
            prevent_collision=prevent_collision,
            constraints=tuple(constraints),
        )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def active_drag(self) -> LayoutItem | None:
        return self.drag_state.active_drag if self.drag_state else None

    @property
    def container_height(self) -> int:
        """Height of the layout in rows."""
        return bottom(self.layout)

    @property
    def is_interacting(self) -> bool:
        return (
            self.drag_state is not None
            or self.resize_state is not None
            or self.dropping_position is not None
        )

    def set_layout(self, layout: Layout) -> GridSession:
        """Replace the layout, correcting bounds and compacting it."""
        return replace(self, layout=self._normalize(layout))

    def _normalize(self, layout: Layout) -> Layout:
        return self.compactor.compact(correct_bounds(layout, self.cols), self.cols)

    def _context(self) -> ConstraintContext:
        return ConstraintContext(cols=self.cols, layout=self.layout)

    # ------------------------------------------------------------------
    # Drag
    # ------------------------------------------------------------------

    def drag_start(self, item_id: str, x: int, y: int) -> GridSession:
        item = get_layout_item(self.layout, item_id)
        if item is None or item.static or item.is_draggable is False:
            return self
        placeholder = replace(item.clone(), x=x, y=y, static=False, moved=False)
        return replace(
            self,
            drag_state=DragState(
                active_drag=placeholder,
                old_drag_item=item.clone(),
                old_layout=clone_layout(self.layout),
            ),
        )

    def _move(self, item: LayoutItem, x: int, y: int) -> Layout:
        x, y = apply_position_constraints(self.constraints, item, x, y, self._context())
        moved = move_element(
            self.layout,
            item,
            x,
            y,
            True,
            self.prevent_collision,
            self.compactor.type,
            self.cols,
            self.compactor.allow_overlap,
        )
        return self.compactor.compact(moved, self.cols)

    def drag(self, item_id: str, x: int, y: int) -> GridSession:
        item = get_layout_item(self.layout, item_id)
        if item is None or self.drag_state is None:
            return self
        drag_state = replace(
            self.drag_state, active_drag=replace(self.drag_state.active_drag, x=x, y=y)
        )
        return replace(self, layout=self._move(item, x, y), drag_state=drag_state)

    def drag_stop(self, item_id: str, x: int, y: int) -> GridSession:
        item = get_layout_item(self.layout, item_id)
        if item is None:
            return replace(self, drag_state=None)
        return replace(self, layout=self._move(item, x, y), drag_state=None)

    # ------------------------------------------------------------------
    # Resize
    # ------------------------------------------------------------------

    def resize_start(
        self, item_id: str, handle: ResizeHandle | str | None = None
    ) -> GridSession:
        item = get_layout_item(self.layout, item_id)
        if item is None or item.static or item.is_resizable is False:
            return self
        if isinstance(handle, str):
            handle = ResizeHandle(handle)
        if (
            handle is not None
            and item.resize_handles is not None
            and handle not in item.resize_handles
        ):
            return self
        return replace(
            self,
            resize_state=ResizeState(
                old_resize_item=item.clone(),
                old_layout=clone_layout(self.layout),
                handle=handle,
            ),
        )

    def resize(
        self,
        item_id: str,
        w: int,
        h: int,
        x: int | None = None,
        y: int | None = None,
    ) -> GridSession:
        item = get_layout_item(self.layout, item_id)
        if item is None:
            return self
        handle = self.resize_state.handle if self.resize_state else None
        w, h = apply_size_constraints(self.constraints, item, w, h, handle, self._context())
        resized = resize_element(
            self.layout,
            item,
            w,
            h,
            x,
            y,
            handle,
            self.prevent_collision,
            self.compactor.type,
            self.cols,
            self.compactor.allow_overlap,
        )
        return replace(self, layout=self.compactor.compact(resized, self.cols))

    def resize_stop(self, item_id: str, w: int, h: int) -> GridSession:
        return replace(self.resize(item_id, w, h), resize_state=None)

    # ------------------------------------------------------------------
    # External drop
    # ------------------------------------------------------------------

    def drop_drag_over(
        self, dropping_item: LayoutItem, position: DroppingPosition
    ) -> GridSession:
        """Show *dropping_item* in the layout while it hovers over the grid.

        The first call inserts the placeholder; later calls move it to
        the cell under the pointer.
        """
        current = get_layout_item(self.layout, dropping_item.i)
        if current is None:
            layout = self._normalize([*self.layout, dropping_item.clone()])
        elif (current.x, current.y) != (dropping_item.x, dropping_item.y):
            layout = self._move(current, dropping_item.x, dropping_item.y)
        else:
            layout = self.layout
        return replace(self, layout=layout, dropping_position=position)

    def drop_drag_leave(self) -> GridSession:
        layout = [item.clone() for item in self.layout if item.i != DROPPING_ITEM_ID]
        return replace(self, layout=layout, dropping_position=None)

    def drop(self, dropped: LayoutItem) -> GridSession:
        """Turn the hovering placeholder into *dropped* at its current cell."""
        layout = []
        for item in self.layout:
            if item.i == DROPPING_ITEM_ID:
                item = replace(item.clone(), i=dropped.i, static=False)
            else:
                item = item.clone()
            layout.append(item)
        logger.debug("Dropped %r into the layout", dropped.i)
        return replace(self, layout=self._normalize(layout), dropping_position=None)
