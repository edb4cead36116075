"""Tests for SVG rendering."""

import xml.etree.ElementTree as ET

from layout_fixtures import item

from dashgrid.parser.model import APPEND_BOTTOM, GridConfig
from dashgrid.render.svg import render_layout_svg
from dashgrid.themes import DARK_THEME, LIGHT_THEME

CONFIG = GridConfig(cols=12, row_height=60, width=1330)


def _render_simple(**kwargs):
    layout = [
        item("header", 0, 0, 12, 1, static=True),
        item("chart", 0, 1, 8, 3),
        item("stats", 8, 1, 4, 2),
    ]
    return render_layout_svg(layout, DARK_THEME, CONFIG, **kwargs)


def test_render_produces_valid_svg():
    root = ET.fromstring(_render_simple())
    assert root.tag.endswith("svg")


def test_render_contains_item_groups_and_labels():
    svg = _render_simple()
    for name in ("header", "chart", "stats"):
        assert f'id="item-{name}"' in svg
        assert f">{name}<" in svg


def test_render_contains_title():
    svg = _render_simple(title="Ops Dashboard")
    assert "Ops Dashboard" in svg


def test_render_dark_theme_colors():
    svg = _render_simple()
    assert DARK_THEME.background_color in svg
    assert DARK_THEME.item_fill in svg
    assert DARK_THEME.static_fill in svg


def test_render_light_theme():
    svg = render_layout_svg([item("a", 0, 0, 2, 2)], LIGHT_THEME, CONFIG)
    assert LIGHT_THEME.item_fill in svg
    assert DARK_THEME.item_fill not in svg


def test_render_size_follows_rows():
    short = ET.fromstring(render_layout_svg([item("a", 0, 0, 1, 1)], DARK_THEME, CONFIG))
    tall = ET.fromstring(render_layout_svg([item("a", 0, 0, 1, 5)], DARK_THEME, CONFIG))
    assert float(tall.get("height")) > float(short.get("height"))
    assert tall.get("width") == short.get("width")


def test_render_placeholder_is_dashed():
    svg = _render_simple(placeholder=item("__dropping-elem__", 0, 4, 2, 2))
    assert DARK_THEME.placeholder_dash in svg
    assert DARK_THEME.placeholder_stroke in svg


def test_render_empty_layout():
    root = ET.fromstring(render_layout_svg([], DARK_THEME))
    assert root.tag.endswith("svg")


def test_render_resolves_pending_rows():
    svg = render_layout_svg(
        [item("a", 0, 0, 2, 2), item("b", 0, APPEND_BOTTOM, 2, 1)], DARK_THEME, CONFIG
    )
    assert 'id="item-b"' in svg
