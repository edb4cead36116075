"""Layout validator: programmatic checks for layout defects.

Runs a suite of checks against a layout and returns a list of Violation
objects describing any problems found. Nothing here raises for a bad
layout; callers decide what to do with the violations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from dashgrid.layout.overlaps import overlap_clusters
from dashgrid.parser.model import Layout, RowSentinel


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Violation:
    check: str
    severity: Severity
    message: str
    context: dict = field(default_factory=dict)


def validate_layout(
    layout: Layout, cols: int | None = None, allow_overlap: bool = False
) -> list[Violation]:
    """Run all layout checks and return violations."""
    violations: list[Violation] = []
    violations.extend(check_unique_ids(layout))
    violations.extend(check_item_sizes(layout))
    violations.extend(check_size_limits(layout))
    if cols is not None:
        violations.extend(check_column_bounds(layout, cols))
    if not allow_overlap:
        violations.extend(check_overlaps(layout))
    return violations


def check_unique_ids(layout: Layout) -> list[Violation]:
    violations: list[Violation] = []
    seen: set[str] = set()
    for item in layout:
        if item.i in seen:
            violations.append(
                Violation(
                    check="unique_ids",
                    severity=Severity.ERROR,
                    message=f"Item id '{item.i}' appears more than once",
                    context={"item": item.i},
                )
            )
        seen.add(item.i)
    return violations


def check_item_sizes(layout: Layout) -> list[Violation]:
    """Sizes below one cell and negative coordinates are normalized away
    by bounds correction, so they are reported as warnings."""
    violations: list[Violation] = []
    for item in layout:
        if item.w < 1 or item.h < 1:
            violations.append(
                Violation(
                    check="item_size",
                    severity=Severity.WARNING,
                    message=f"Item '{item.i}' has size {item.w}x{item.h}",
                    context={"item": item.i},
                )
            )
        y_negative = not isinstance(item.y, RowSentinel) and item.y < 0
        if item.x < 0 or y_negative:
            violations.append(
                Violation(
                    check="negative_position",
                    severity=Severity.WARNING,
                    message=f"Item '{item.i}' is at ({item.x}, {item.y})",
                    context={"item": item.i},
                )
            )
    return violations


def check_size_limits(layout: Layout) -> list[Violation]:
    violations: list[Violation] = []
    for item in layout:
        problems = []
        if item.min_w is not None and item.max_w is not None and item.min_w > item.max_w:
            problems.append(f"minW {item.min_w} > maxW {item.max_w}")
        if item.min_h is not None and item.max_h is not None and item.min_h > item.max_h:
            problems.append(f"minH {item.min_h} > maxH {item.max_h}")
        if problems:
            violations.append(
                Violation(
                    check="size_limits",
                    severity=Severity.ERROR,
                    message=f"Item '{item.i}': " + ", ".join(problems),
                    context={"item": item.i},
                )
            )
    return violations


def check_column_bounds(layout: Layout, cols: int) -> list[Violation]:
    violations: list[Violation] = []
    for item in layout:
        if item.x + item.w > cols:
            violations.append(
                Violation(
                    check="column_bounds",
                    severity=Severity.WARNING,
                    message=(
                        f"Item '{item.i}' spans columns {item.x}..{item.x + item.w}"
                        f" but the grid has {cols}"
                    ),
                    context={"item": item.i, "cols": cols},
                )
            )
    return violations


def check_overlaps(layout: Layout) -> list[Violation]:
    placed = [item for item in layout if not isinstance(item.y, RowSentinel)]
    return [
        Violation(
            check="overlap",
            severity=Severity.ERROR,
            message="Overlapping items: " + ", ".join(f"'{i}'" for i in cluster),
            context={"items": cluster},
        )
        for cluster in overlap_clusters(placed)
    ]
