"""Tests for the position/size constraint pipeline."""

import pytest
from layout_fixtures import item

from dashgrid.layout.constraints import (
    DEFAULT_CONSTRAINTS,
    ConstraintContext,
    LayoutConstraint,
    apply_position_constraints,
    apply_size_constraints,
    aspect_ratio,
    bounded_x,
    bounded_y,
    container_bounds,
    grid_bounds,
    max_size,
    min_max_size,
    min_size,
    snap_to_grid,
)
from dashgrid.parser.model import ResizeHandle

CTX = ConstraintContext(cols=12)

# 4 columns of exactly 100px, rows of 100px, 10px gaps
SQUARE_CTX = ConstraintContext(
    cols=4, container_width=430, row_height=100, margin=(10, 10)
)


def test_grid_bounds_position():
    it = item("a", 0, 0, 3, 2)
    assert apply_position_constraints([grid_bounds], it, 20, -1, CTX) == (9, 0)
    assert apply_position_constraints([grid_bounds], it, 4, 50, CTX) == (4, 50)


def test_grid_bounds_position_with_max_rows():
    ctx = ConstraintContext(cols=12, max_rows=10)
    it = item("a", 0, 0, 1, 3)
    assert apply_position_constraints([grid_bounds], it, 0, 9, ctx) == (0, 7)


def test_grid_bounds_size_uses_remaining_columns():
    it = item("a", 10, 0, 2, 1)
    assert apply_size_constraints([grid_bounds], it, 5, 1, None, CTX) == (2, 1)


def test_grid_bounds_size_west_handle_reaches_first_column():
    it = item("a", 10, 0, 2, 1)
    assert apply_size_constraints([grid_bounds], it, 5, 1, "w", CTX) == (5, 1)
    assert apply_size_constraints([grid_bounds], it, 20, 1, "w", CTX) == (12, 1)


def test_grid_bounds_size_minimum_is_one():
    it = item("a", 0, 0, 2, 2)
    assert apply_size_constraints([grid_bounds], it, 0, -3, None, CTX) == (1, 1)


def test_min_max_size():
    it = item("a", 0, 0, 3, 3, min_w=2, max_w=4, min_h=2)
    assert apply_size_constraints([min_max_size], it, 10, 100, None, CTX) == (4, 100)
    assert apply_size_constraints([min_max_size], it, 1, 1, None, CTX) == (2, 2)


def test_container_bounds_uses_visible_rows():
    ctx = ConstraintContext(
        cols=12, container_height=330, row_height=100, margin=(10, 10)
    )
    it = item("a", 0, 0, 2, 2)
    # (330 + 10) / (100 + 10) -> 3 visible rows
    assert apply_position_constraints([container_bounds], it, 0, 5, ctx) == (0, 1)


def test_container_bounds_without_height_falls_back_to_max_rows():
    ctx = ConstraintContext(cols=12, max_rows=6)
    it = item("a", 0, 0, 2, 2)
    assert apply_position_constraints([container_bounds], it, 0, 10, ctx) == (0, 4)


def test_bounded_axes_are_independent():
    ctx = ConstraintContext(cols=12, max_rows=8)
    it = item("a", 0, 0, 2, 2)
    assert apply_position_constraints([bounded_x], it, 30, 30, ctx) == (10, 30)
    assert apply_position_constraints([bounded_y], it, 30, 30, ctx) == (30, 6)


def test_snap_to_grid():
    it = item("a", 0, 0, 1, 1)
    assert apply_position_constraints([snap_to_grid(4)], it, 5, 7, CTX) == (4, 8)
    assert apply_position_constraints([snap_to_grid(2, 3)], it, 3, 4, CTX) == (4, 3)


def test_snap_to_grid_rejects_bad_steps():
    with pytest.raises(ValueError):
        snap_to_grid(0)


def test_constraint_order_matters():
    it = item("a", 0, 0, 3, 1)
    snap_then_bound = [snap_to_grid(4), bounded_x]
    bound_then_snap = [bounded_x, snap_to_grid(4)]
    assert apply_position_constraints(snap_then_bound, it, 10, 0, CTX) == (9, 0)
    assert apply_position_constraints(bound_then_snap, it, 10, 0, CTX) == (8, 0)


def test_aspect_ratio_derives_height_from_width():
    it = item("a", 0, 0, 1, 1)
    square = aspect_ratio(1)
    assert apply_size_constraints([square], it, 2, 5, "se", SQUARE_CTX) == (2, 2)
    wide = aspect_ratio(2)
    assert apply_size_constraints([wide], it, 2, 5, None, SQUARE_CTX) == (2, 1)


def test_aspect_ratio_derives_width_from_vertical_edge():
    it = item("a", 0, 0, 1, 1)
    square = aspect_ratio(1)
    assert apply_size_constraints([square], it, 4, 2, ResizeHandle.S, SQUARE_CTX) == (
        2,
        2,
    )


def test_aspect_ratio_rejects_non_positive():
    with pytest.raises(ValueError):
        aspect_ratio(0)


def test_min_and_max_size_factories():
    it = item("a", 0, 0, 1, 1)
    assert apply_size_constraints([min_size(2, 3)], it, 1, 1, None, CTX) == (2, 3)
    assert apply_size_constraints([max_size(4, 4)], it, 9, 2, None, CTX) == (4, 2)


def test_default_constraints():
    it = item("a", 10, 0, 2, 2, max_h=3)
    assert [c.name for c in DEFAULT_CONSTRAINTS] == ["gridBounds", "minMaxSize"]
    assert apply_size_constraints(DEFAULT_CONSTRAINTS, it, 6, 6, None, CTX) == (2, 3)


def test_custom_constraint_in_pipeline():
    even_x = LayoutConstraint(
        "evenX", constrain_position=lambda it, x, y, ctx: (x - x % 2, y)
    )
    it = item("a", 0, 0, 1, 1)
    assert apply_position_constraints([even_x, grid_bounds], it, 7, 2, CTX) == (6, 2)
    # Size-only constraints leave positions alone
    assert apply_position_constraints([min_max_size], it, 7, 2, CTX) == (7, 2)
