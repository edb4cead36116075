"""Layout constants used across layout modules.

Centralizes the default grid geometry and the responsive breakpoint
tables so function defaults and the CLI agree.
"""

import math

# ---------------------------------------------------------------------------
# Grid geometry defaults
# ---------------------------------------------------------------------------
DEFAULT_COLS: int = 12
"""Number of columns in a grid when none is given."""

DEFAULT_ROW_HEIGHT: float = 150.0
"""Pixel height of one grid row."""

DEFAULT_MARGIN: tuple[float, float] = (10.0, 10.0)
"""Horizontal and vertical pixel gap between neighbouring items."""

DEFAULT_MAX_ROWS: float = math.inf
"""Row limit used by clamping helpers. Unbounded by default."""

DEFAULT_CONTAINER_WIDTH: float = 1280.0
"""Container width assumed before the host reports a measurement."""

# ---------------------------------------------------------------------------
# Responsive defaults
# ---------------------------------------------------------------------------
DEFAULT_BREAKPOINTS: dict[str, int] = {
    "lg": 1200,
    "md": 996,
    "sm": 768,
    "xs": 480,
    "xxs": 0,
}
"""Breakpoint name -> minimum container width in pixels."""

DEFAULT_BREAKPOINT_COLS: dict[str, int] = {
    "lg": 12,
    "md": 10,
    "sm": 6,
    "xs": 4,
    "xxs": 2,
}
"""Breakpoint name -> column count."""

# ---------------------------------------------------------------------------
# Interaction
# ---------------------------------------------------------------------------
DROPPING_ITEM_ID: str = "__dropping-elem__"
"""Id of the placeholder item inserted while an external item hovers."""

DEFAULT_DROPPING_SIZE: tuple[int, int] = (1, 1)
"""Grid size (w, h) of the dropping placeholder."""
