"""Tests for the CLI entry points."""

import json
from pathlib import Path

from click.testing import CliRunner

from dashgrid.cli import cli

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "layouts"
DASHBOARD = FIXTURES / "dashboard.json"
RESPONSIVE = FIXTURES / "responsive.json"


def _geometry(path: Path) -> dict:
    data = json.loads(path.read_text())
    layout = data["layout"] if isinstance(data, dict) else data
    return {it["i"]: (it["x"], it["y"], it["w"], it["h"]) for it in layout}


def test_version():
    """--version flag prints version string."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "version" in result.output.lower()


def test_compact_removes_gaps(tmp_path):
    src = tmp_path / "gappy.json"
    src.write_text('[{"i": "a", "x": 0, "y": 5, "w": 2, "h": 2}]')
    runner = CliRunner()
    result = runner.invoke(cli, ["compact", str(src)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["layout"][0]["y"] == 0
    assert data["compactType"] == "vertical"


def test_compact_items_without_rows(tmp_path):
    src = tmp_path / "rowless.json"
    src.write_text('[{"i": "a", "w": 2, "h": 2}, {"i": "b", "w": 2}]')
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["compact", str(src), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert _geometry(out) == {"a": (0, 0, 2, 2), "b": (0, 2, 2, 1)}


def test_compact_overrides(tmp_path):
    src = tmp_path / "wide.json"
    src.write_text('[{"i": "a", "x": 9, "y": 0, "w": 3, "h": 1}]')
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["compact", str(src), "--cols", "6", "--compact-type", "horizontal", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert _geometry(out) == {"a": (0, 0, 3, 1)}
    assert json.loads(out.read_text())["cols"] == 6


def test_move_pushes_items(tmp_path):
    out = tmp_path / "moved.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["move", str(DASHBOARD), "table", "0", "0", "-o", str(out)])
    assert result.exit_code == 0, result.output
    geo = _geometry(out)
    # The static header keeps row 0, so the table lands right below it
    assert geo["header"] == (0, 0, 12, 1)
    assert geo["table"] == (0, 1, 12, 3)
    assert geo["chart"] == (0, 4, 8, 4)


def test_move_unknown_item(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["move", str(DASHBOARD), "nope", "0", "0"])
    assert result.exit_code == 1
    assert "Unknown item 'nope'" in result.output


def test_resize_grows_item(tmp_path):
    out = tmp_path / "resized.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["resize", str(DASHBOARD), "stats", "4", "4", "-o", str(out)])
    assert result.exit_code == 0, result.output
    geo = _geometry(out)
    assert geo["stats"] == (8, 1, 4, 4)
    assert geo["alerts"] == (8, 5, 4, 2)


def test_resize_prevent_collision(tmp_path):
    out = tmp_path / "resized.json"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["resize", str(DASHBOARD), "stats", "4", "4", "--prevent-collision", "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert _geometry(out)["stats"] == (8, 1, 4, 2)


def test_resolve_derives_breakpoint_layout(tmp_path):
    out = tmp_path / "md.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", str(RESPONSIVE), "--width", "1000", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "Breakpoint: md (10 cols)" in result.output
    assert _geometry(out) == {
        "a": (0, 0, 5, 2),
        "b": (5, 0, 5, 2),
        "c": (0, 2, 10, 1),
    }


def test_resolve_from_previous_breakpoint(tmp_path):
    out = tmp_path / "sm.json"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["resolve", str(RESPONSIVE), "--width", "800", "--previous", "lg", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert "Breakpoint: sm (6 cols)" in result.output
    assert _geometry(out)["b"] == (3, 0, 3, 2)


def test_resolve_bad_column_table(tmp_path):
    src = tmp_path / "bad.json"
    src.write_text('{"breakpoints": {"lg": 1200}, "cols": {}, "layouts": {}}')
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", str(src), "--width", "1300"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_validate_success():
    """validate command succeeds on valid input."""
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(DASHBOARD)])
    assert result.exit_code == 0
    assert "Valid: 5 items" in result.output


def test_validate_reports_overlaps():
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(FIXTURES / "overlapping.json")])
    assert result.exit_code == 1
    assert "Overlapping items" in result.output


def test_validate_bad_file(tmp_path):
    """validate command reports parse errors."""
    bad = tmp_path / "bad.json"
    bad.write_text("not json at all")
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(bad)])
    assert result.exit_code == 1
    assert "Parse error" in result.output


def test_info_output():
    """info command prints layout metadata."""
    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(DASHBOARD)])
    assert result.exit_code == 0
    assert "Items: 5" in result.output
    assert "Columns: 12" in result.output
    assert "Rows: 8" in result.output
    assert "Compaction: vertical" in result.output
    assert "Static: header" in result.output


def test_render_produces_svg(tmp_path):
    """render command produces an SVG file."""
    out = tmp_path / "output.svg"
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(DASHBOARD), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.exists()
    assert "<svg" in out.read_text()
    assert "Rendered 5 items, 8 rows" in result.output


def test_render_default_output(tmp_path):
    """render command uses input stem + .svg when no -o given."""
    src = tmp_path / "test.json"
    src.write_text(DASHBOARD.read_text())
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(src)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "test.svg").exists()


def test_render_with_theme_and_title(tmp_path):
    out = tmp_path / "output.svg"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["render", str(DASHBOARD), "-o", str(out), "--theme", "light", "--title", "Ops"],
    )
    assert result.exit_code == 0, result.output
    assert "Ops" in out.read_text()


def test_verbose_flag_accepted(tmp_path):
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["-v", "compact", str(DASHBOARD), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.exists()
