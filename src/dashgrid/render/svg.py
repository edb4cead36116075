"""SVG preview of a grid layout using drawsvg."""

from __future__ import annotations

import drawsvg as draw

from dashgrid.layout.bounds import bottom, resolve_append_rows
from dashgrid.layout.calculate import (
    PositionParams,
    calc_grid_col_width,
    calc_grid_item_position,
    calc_grid_item_wh_px,
)
from dashgrid.parser.model import GridConfig, Layout, LayoutItem
from dashgrid.render.constants import (
    CONTAINER_CORNER_RADIUS,
    EMPTY_CONTAINER_ROWS,
    LABEL_INSET,
    OUTER_PADDING,
    TITLE_BASELINE,
    TITLE_HEIGHT,
)
from dashgrid.render.style import Theme


def render_layout_svg(
    layout: Layout,
    theme: Theme,
    config: GridConfig | None = None,
    title: str = "",
    placeholder: LayoutItem | None = None,
) -> str:
    """Render *layout* to an SVG string.

    Item pixel geometry comes from the position calculator, so the
    preview matches what a browser host would draw for the same config.
    """
    config = config or GridConfig()
    params = PositionParams.from_config(config)
    layout = resolve_append_rows(layout)

    rows = max(bottom(layout), EMPTY_CONTAINER_ROWS)
    if placeholder is not None:
        rows = max(rows, placeholder.y + placeholder.h)
    padding_y = params.container_padding[1]
    container_w = params.container_width
    container_h = (
        calc_grid_item_wh_px(rows, params.row_height, params.margin[1]) + padding_y * 2
    )

    title_h = TITLE_HEIGHT if title else 0.0
    svg_width = int(container_w + OUTER_PADDING * 2)
    svg_height = int(container_h + OUTER_PADDING * 2 + title_h)

    d = draw.Drawing(svg_width, svg_height)
    d.append(draw.Rectangle(0, 0, svg_width, svg_height, fill=theme.background_color))

    if title:
        d.append(draw.Text(
            title,
            theme.title_font_size,
            OUTER_PADDING, TITLE_BASELINE,
            fill=theme.title_color,
            font_family=theme.label_font_family,
            font_weight="bold",
        ))

    origin_x = OUTER_PADDING
    origin_y = OUTER_PADDING + title_h
    d.append(draw.Rectangle(
        origin_x, origin_y, container_w, container_h,
        rx=CONTAINER_CORNER_RADIUS, ry=CONTAINER_CORNER_RADIUS,
        fill=theme.container_fill,
        stroke=theme.container_stroke,
        stroke_width=1.0,
    ))

    _render_column_guides(d, params, origin_x, origin_y, container_h, theme)

    for item in layout:
        _render_item(d, params, item, origin_x, origin_y, theme)

    if placeholder is not None:
        pos = calc_grid_item_position(
            params, placeholder.x, placeholder.y, placeholder.w, placeholder.h
        )
        d.append(draw.Rectangle(
            origin_x + pos.left, origin_y + pos.top, pos.width, pos.height,
            rx=theme.item_corner_radius, ry=theme.item_corner_radius,
            fill=theme.placeholder_fill,
            stroke=theme.placeholder_stroke,
            stroke_width=theme.item_stroke_width,
            stroke_dasharray=theme.placeholder_dash,
        ))

    return d.as_svg()


def _render_column_guides(
    d: draw.Drawing,
    params: PositionParams,
    origin_x: float,
    origin_y: float,
    container_h: float,
    theme: Theme,
) -> None:
    """Shade every column so empty cells are visible."""
    col_width = calc_grid_col_width(params)
    padding_x, padding_y = params.container_padding
    for col in range(params.cols):
        left = padding_x + col * (col_width + params.margin[0])
        d.append(draw.Rectangle(
            origin_x + left, origin_y + padding_y,
            col_width, container_h - padding_y * 2,
            fill=theme.column_guide_fill,
        ))


def _render_item(
    d: draw.Drawing,
    params: PositionParams,
    item: LayoutItem,
    origin_x: float,
    origin_y: float,
    theme: Theme,
) -> None:
    pos = calc_grid_item_position(params, item.x, item.y, item.w, item.h)
    fill = theme.static_fill if item.static else theme.item_fill
    stroke = theme.static_stroke if item.static else theme.item_stroke

    group = draw.Group(id=f"item-{item.i}")
    group.append(draw.Rectangle(
        origin_x + pos.left, origin_y + pos.top, pos.width, pos.height,
        rx=theme.item_corner_radius, ry=theme.item_corner_radius,
        fill=fill,
        stroke=stroke,
        stroke_width=theme.item_stroke_width,
    ))
    group.append(draw.Text(
        item.i,
        theme.label_font_size,
        origin_x + pos.left + LABEL_INSET,
        origin_y + pos.top + LABEL_INSET + theme.label_font_size,
        fill=theme.label_color,
        font_family=theme.label_font_family,
    ))
    d.append(group)
