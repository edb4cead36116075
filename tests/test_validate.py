"""Validator checks, run against hand-built layouts and every fixture document."""

from __future__ import annotations

from pathlib import Path

import pytest
from layout_fixtures import item

from dashgrid.layout.bounds import correct_bounds
from dashgrid.layout.compactors import get_compactor
from dashgrid.layout.validate import (
    Severity,
    check_column_bounds,
    check_item_sizes,
    check_overlaps,
    check_size_limits,
    check_unique_ids,
    validate_layout,
)
from dashgrid.parser.json_layout import parse_grid_document
from dashgrid.parser.model import APPEND_BOTTOM

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "layouts"

# Every grid document fixture except the deliberately broken one
GRID_FILES = sorted(
    p for p in FIXTURES_DIR.glob("*.json")
    if p.stem not in {"overlapping", "responsive"}
)
GRID_IDS = [p.stem for p in GRID_FILES]


def _errors(violations):
    return [v for v in violations if v.severity == Severity.ERROR]


def test_duplicate_ids_are_errors():
    layout = [item("a", 0, 0, 1, 1), item("a", 2, 0, 1, 1)]
    violations = check_unique_ids(layout)
    assert len(violations) == 1
    assert violations[0].severity == Severity.ERROR
    assert violations[0].context == {"item": "a"}


def test_degenerate_sizes_and_positions_are_warnings():
    layout = [item("flat", 0, 0, 0, 1), item("off", -1, 0, 1, 1)]
    violations = check_item_sizes(layout)
    assert [v.check for v in violations] == ["item_size", "negative_position"]
    assert all(v.severity == Severity.WARNING for v in violations)


def test_pending_rows_are_not_negative_positions():
    assert check_item_sizes([item("p", 0, APPEND_BOTTOM, 1, 1)]) == []


def test_inverted_size_limits_are_errors():
    violations = check_size_limits([item("a", 0, 0, 2, 2, min_w=4, max_w=3)])
    assert len(violations) == 1
    assert "minW 4 > maxW 3" in violations[0].message


def test_column_overflow_is_warning():
    violations = check_column_bounds([item("a", 10, 0, 4, 1)], 12)
    assert len(violations) == 1
    assert violations[0].severity == Severity.WARNING


def test_overlap_clusters_are_errors():
    layout = [item("a", 0, 0, 2, 2), item("b", 1, 1, 2, 2), item("c", 5, 0, 1, 1)]
    violations = check_overlaps(layout)
    assert len(violations) == 1
    assert violations[0].context["items"] == ["a", "b"]


def test_overlap_check_skips_pending_rows():
    layout = [item("a", 0, 0, 2, 2), item("p", 0, APPEND_BOTTOM, 2, 2)]
    assert check_overlaps(layout) == []


def test_validate_layout_skips_optional_checks():
    layout = [item("a", 10, 0, 4, 1), item("b", 10, 0, 4, 1)]
    assert {v.check for v in validate_layout(layout)} == {"overlap"}
    assert validate_layout(layout, allow_overlap=True) == []
    assert {v.check for v in validate_layout(layout, cols=12)} == {
        "overlap",
        "column_bounds",
    }


@pytest.fixture(params=GRID_FILES, ids=GRID_IDS)
def grid_document(request):
    return parse_grid_document(request.param.read_text())


class TestFixtureDocuments:
    """Every fixture stays valid once normalized."""

    def test_fixture_parses(self, grid_document):
        assert grid_document.layout

    def test_normalized_layout_has_no_errors(self, grid_document):
        doc = grid_document
        compactor = get_compactor(doc.compact_type, doc.allow_overlap)
        layout = compactor.compact(correct_bounds(doc.layout, doc.cols), doc.cols)
        violations = validate_layout(layout, doc.cols, doc.allow_overlap)
        assert not violations, "\n".join(v.message for v in violations)


def test_overlapping_fixture_is_rejected():
    doc = parse_grid_document((FIXTURES_DIR / "overlapping.json").read_text())
    errors = _errors(validate_layout(doc.layout, doc.cols))
    assert [v.check for v in errors] == ["overlap"]
