"""Dark grey dashboard theme."""

from dashgrid.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    container_fill="rgba(255, 255, 255, 0.04)",
    container_stroke="rgba(255, 255, 255, 0.2)",
    column_guide_fill="rgba(255, 255, 255, 0.03)",
    item_fill="#3d6ea8",
    item_stroke="#9cc3f0",
    item_stroke_width=1.5,
    item_corner_radius=4.0,
    label_color="#e0e0e0",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=13.0,
    title_color="#ffffff",
    title_font_size=20.0,
    static_fill="#5a5a5a",
    static_stroke="#aaaaaa",
)
