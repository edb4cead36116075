"""Rendering constants for layout previews."""

TITLE_HEIGHT: float = 40.0
"""Vertical space reserved above the container when a title is drawn."""

TITLE_BASELINE: float = 28.0
"""Baseline of the title text, measured from the top of the image."""

OUTER_PADDING: float = 20.0
"""Blank space between the image edge and the grid container."""

CONTAINER_CORNER_RADIUS: float = 6.0
"""Corner radius of the container background."""

EMPTY_CONTAINER_ROWS: int = 1
"""Rows drawn for an empty layout so the container is still visible."""

LABEL_INSET: float = 8.0
"""Offset of an item's label from its top-left corner."""
