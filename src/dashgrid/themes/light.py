"""Light theme."""

from dashgrid.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    container_fill="rgba(0, 0, 0, 0.03)",
    container_stroke="rgba(0, 0, 0, 0.15)",
    column_guide_fill="rgba(0, 0, 0, 0.03)",
    item_fill="#dbe8f7",
    item_stroke="#2f6db5",
    item_stroke_width=1.5,
    item_corner_radius=4.0,
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=14.0,
    title_color="#111111",
    title_font_size=22.0,
    static_fill="#e6e6e6",
    static_stroke="#888888",
    placeholder_fill="rgba(220, 40, 40, 0.15)",
    placeholder_stroke="#c82828",
)
