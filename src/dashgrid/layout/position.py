"""Position strategies: turn pixel geometry into style properties.

The rendering boundary picks a strategy; the engine never looks at the
output. ``resize_item_in_direction`` keeps a pixel-level resize inside
the container while the gesture is in progress.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from dashgrid.parser.model import Position, ResizeHandle


class PositionStrategyType(Enum):
    TRANSFORM = "transform"
    ABSOLUTE = "absolute"


def _px(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{value}px"


def perc(num: float) -> str:
    """Format a 0..1 fraction as a CSS percentage."""
    return f"{num * 100}%"


def set_transform(pos: Position) -> dict[str, str]:
    translate = f"translate({_px(pos.left)},{_px(pos.top)})"
    return {
        "transform": translate,
        "width": _px(pos.width),
        "height": _px(pos.height),
        "position": "absolute",
    }


def set_top_left(pos: Position) -> dict[str, str]:
    return {
        "top": _px(pos.top),
        "left": _px(pos.left),
        "width": _px(pos.width),
        "height": _px(pos.height),
        "position": "absolute",
    }


_STYLE_BUILDERS: dict[PositionStrategyType, Callable[[Position], dict[str, str]]] = {
    PositionStrategyType.TRANSFORM: set_transform,
    PositionStrategyType.ABSOLUTE: set_top_left,
}


@dataclass(frozen=True)
class PositionStrategy:
    """How item geometry is expressed, and how pointer pixels map back.

    ``scale`` compensates for a container rendered under a CSS scale
    transform: pointer deltas are divided by it.
    """

    type: PositionStrategyType
    scale: float = 1.0

    def calc_style(self, pos: Position) -> dict[str, str]:
        return _STYLE_BUILDERS[self.type](pos)

    def calc_drag_position(
        self,
        client_x: float,
        client_y: float,
        offset_x: float,
        offset_y: float,
    ) -> tuple[float, float]:
        """Return (left, top) in unscaled container pixels."""
        return (client_x - offset_x) / self.scale, (client_y - offset_y) / self.scale


TRANSFORM_STRATEGY = PositionStrategy(PositionStrategyType.TRANSFORM)
ABSOLUTE_STRATEGY = PositionStrategy(PositionStrategyType.ABSOLUTE)
DEFAULT_POSITION_STRATEGY = TRANSFORM_STRATEGY


def create_scaled_strategy(scale: float) -> PositionStrategy:
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    return PositionStrategy(PositionStrategyType.TRANSFORM, scale=scale)


# ---------------------------------------------------------------------------
# Pixel-level resize
# ---------------------------------------------------------------------------


def _resize_north(current: Position, new: Position, container_width: float) -> Position:
    top = current.top - (new.height - current.height)
    height = current.height if top < 0 else new.height
    return Position(left=new.left, top=max(top, 0), width=new.width, height=height)


def _resize_south(current: Position, new: Position, container_width: float) -> Position:
    height = current.height if new.top < 0 else new.height
    return Position(left=new.left, top=max(new.top, 0), width=new.width, height=height)


def _resize_east(current: Position, new: Position, container_width: float) -> Position:
    width = current.width if current.left + new.width > container_width else new.width
    return Position(left=max(new.left, 0), top=new.top, width=width, height=new.height)


def _resize_west(current: Position, new: Position, container_width: float) -> Position:
    left = current.left + current.width - new.width
    if left < 0:
        return Position(
            left=0,
            top=max(new.top, 0),
            width=current.left + current.width,
            height=new.height,
        )
    return Position(left=left, top=max(new.top, 0), width=new.width, height=new.height)


_RESIZERS = {
    "n": _resize_north,
    "s": _resize_south,
    "e": _resize_east,
    "w": _resize_west,
}


def resize_item_in_direction(
    direction: ResizeHandle | str,
    current: Position,
    new: Position,
    container_width: float,
) -> Position:
    """Apply a pixel resize from *direction*, keeping the item in the container.

    Corner handles apply the vertical edge first, then the horizontal
    one, each seeing the other's result.
    """
    if isinstance(direction, ResizeHandle):
        direction = direction.value
    result = replace(new)
    for edge in direction:
        result = _RESIZERS[edge](current, result, container_width)
    return result
